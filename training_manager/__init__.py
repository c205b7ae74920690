from .schemas import build, load_config, parse_date, Config, Window
from .validation import validate, raise_for_errors, Finding
from .resolve import resolve, ActiveGroup, Conflict, NoActiveGroup
from .assign import assign, format_result, role_payloads, AssignmentResult
from .errors import (ConfigError, InvalidWindow, MalformedDate,
                     UnknownGroupReference, OverlapError, AssignmentError,
                     AmbiguousAssignment)
