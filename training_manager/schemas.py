"""Schema validation and construction of schedule configurations."""
import json
import re
import tomllib
from datetime import date, datetime
from pathlib import Path
from types import MappingProxyType
from typing import (Dict, Iterator, List, Mapping, NamedTuple, Optional,
                    Tuple, Union)
from dateutil.parser import isoparse
from schema import Schema, And, Or, SchemaError  # type: ignore
from training_manager.errors import (InvalidWindow, MalformedDate,
                                     UnknownGroupReference)

# YYYY-MM-DD shape only; impossible days are rejected by `isoparse`.
DATE_REGEX = r'\d{4}-\d{2}-\d{2}'

# Basic structure is specified declaratively using `Schema` objects.
# Relationships between the two sections (group references, window
# ordering) cannot be specified declaratively in this manner and are
# checked in `build`. Dates may arrive as strings or, from TOML files
# with unquoted dates, as `date` objects.
DATE_VALUE = Or(str, date, error='Schedule: dates must be YYYY-MM-DD strings.')

GROUPS_SCHEMA = Schema(
    Or({str: [And(str, error='Groups: members must be strings.')]}, {},
       error='Groups: each group must map to a list of member strings.'))

WINDOW_SCHEMA = Schema({
    'from': DATE_VALUE,
    'to': DATE_VALUE
},
                       ignore_extra_keys=True)

SCHEDULE_SCHEMA = Schema(
    Or({str: [WINDOW_SCHEMA]}, {},
       error='Schedule: each group must map to a list of windows '
       'with from and to dates.'))

CONFIG_SCHEMA = Schema({
    'groups': dict,
    'schedule': dict
},
                       ignore_extra_keys=True)

DateLike = Union[str, date]


class Window(NamedTuple):
    """An inclusive range of calendar dates during which a group is on duty."""
    group: str
    start: date
    end: date

    def covers(self, day: date) -> bool:
        """Checks whether `day` falls within the window (both ends included)."""
        return self.start <= day <= self.end

    def intersection(self, other: 'Window') -> Optional[Tuple[date, date]]:
        """Returns the (first, last) dates shared with `other`, if any."""
        first = max(self.start, other.start)
        last = min(self.end, other.end)
        if first <= last:
            return first, last
        return None


class Config(NamedTuple):
    """A read-only schedule configuration.

    `groups` maps each group name to its ordered members; `schedule` maps
    group names to their windows in the order they were declared. Both
    mappings are read-only views.
    """
    groups: Mapping[str, Tuple[str, ...]]
    schedule: Mapping[str, Tuple[Window, ...]]

    def windows(self) -> Iterator[Window]:
        """Iterates over every window in declared schedule order."""
        for windows in self.schedule.values():
            yield from windows


def parse_date(value: DateLike) -> date:
    """Parses a calendar date in `YYYY-MM-DD` format.

    Args:
        value: A date string, or a `date` (as produced by TOML parsers
            for unquoted dates).

    Returns:
        The corresponding `date`.

    Raises:
        MalformedDate: If the value is not a valid calendar date, including
            values with a time component.
    """
    if isinstance(value, datetime):
        raise MalformedDate(f'Date "{value}" must not have a time component.',
                            value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not re.fullmatch(DATE_REGEX, value):
        raise MalformedDate(f'Date "{value}" is not in YYYY-MM-DD format.',
                            value)
    try:
        return isoparse(value).date()
    except (ValueError, OverflowError) as ex:
        raise MalformedDate(f'Date "{value}" is not a calendar date.',
                            value) from ex


def build(raw_groups: Dict, raw_schedule: Dict) -> Config:
    """Validates and type-converts raw groups and schedule windows.

    Args:
        raw_groups: A mapping of group names to lists of member identifiers.
        raw_schedule: A mapping of group names to lists of windows, each
            a mapping with `from` and `to` dates.

    Returns:
        An immutable `Config`. Declared order is preserved for groups,
        for schedule entries, and for the windows within each entry.

    Raises:
        SchemaError: If either section is malformed.
        UnknownGroupReference: If the schedule names an undeclared group.
        MalformedDate: If a date is not a valid `YYYY-MM-DD` date.
        InvalidWindow: If a window starts after it ends.
    """
    GROUPS_SCHEMA.validate(raw_groups)
    SCHEDULE_SCHEMA.validate(raw_schedule)
    # Additional checks and conversions:
    #  * Every scheduled group must be declared in `groups`.
    #  * All dates should be `date` objects.
    #  * For any window: from <= to.
    groups = {name: tuple(members) for name, members in raw_groups.items()}
    schedule = {}
    for name, raw_windows in raw_schedule.items():
        if name not in groups:
            raise UnknownGroupReference(
                f'Schedule: group "{name}" does not exist in the '
                'groups section.', name)
        windows: List[Window] = []
        for raw_window in raw_windows:
            window = Window(group=name,
                            start=parse_date(raw_window['from']),
                            end=parse_date(raw_window['to']))
            if window.start > window.end:
                raise InvalidWindow(
                    f'Schedule: window for group "{name}" starts '
                    f'({window.start}) after it ends ({window.end}).')
            windows.append(window)
        schedule[name] = tuple(windows)
    return Config(groups=MappingProxyType(groups),
                  schedule=MappingProxyType(schedule))


def load_config(path: Union[str, Path]) -> Config:
    """Reads and builds a configuration from a TOML or JSON file.

    Files ending in `.json` are read as JSON; anything else is read as TOML.

    Raises:
        OSError: If the file cannot be read.
        tomllib.TOMLDecodeError, json.JSONDecodeError: If the file cannot
            be parsed.
        SchemaError: If the `groups` or `schedule` section is missing or
            malformed (or any error raised by `build`).
    """
    path = Path(path)
    if path.suffix.lower() == '.json':
        with open(path) as f:
            raw = json.load(f)
    else:
        with open(path, 'rb') as f:
            raw = tomllib.load(f)
    if not isinstance(raw, dict):
        raise SchemaError('Config: expected a table with `groups` and '
                          '`schedule` sections.')
    CONFIG_SCHEMA.validate(raw)
    return build(raw['groups'], raw['schedule'])
