"""Configuration and assignment errors."""
from typing import List, Tuple
from schema import SchemaError  # type: ignore


class ConfigError(SchemaError):
    """Raised when a schedule configuration cannot be built or validated."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidWindow(ConfigError):
    """Raised for a schedule window that starts after it ends."""


class MalformedDate(InvalidWindow):
    """Raised for a date that is not a `YYYY-MM-DD` calendar date."""
    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class UnknownGroupReference(ConfigError):
    """Raised when the schedule names a group that is not declared."""
    def __init__(self, message: str, group: str):
        super().__init__(message)
        self.group = group


class OverlapError(ConfigError):
    """Raised when windows of different groups cover the same date."""
    def __init__(self, message: str, findings: List):
        super().__init__(message)
        self.findings = findings


class AssignmentError(Exception):
    """Raised for errors when generating assignments."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AmbiguousAssignment(AssignmentError):
    """Raised when more than one group is on duty and no fallback is set."""
    def __init__(self, message: str, groups: Tuple[str, ...]):
        super().__init__(message)
        self.groups = groups
