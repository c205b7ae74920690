"""Resolution of the on-duty group for a reference date."""
from datetime import date
from typing import List, NamedTuple, Tuple, Union
from training_manager.schemas import Config


class NoActiveGroup(NamedTuple):
    """No window covers the reference date."""


class ActiveGroup(NamedTuple):
    """Exactly one group covers the reference date."""
    name: str


class Conflict(NamedTuple):
    """Several groups cover the reference date (in declared order)."""
    names: Tuple[str, ...]


Outcome = Union[NoActiveGroup, ActiveGroup, Conflict]


def covering_groups(config: Config, reference_date: date) -> List[str]:
    """Lists the groups with a window covering `reference_date`.

    Groups appear once each, in the order they are declared in the
    schedule, even if several of their windows cover the date.
    """
    names: List[str] = []
    for window in config.windows():
        if window.covers(reference_date) and window.group not in names:
            names.append(window.group)
    return names


def resolve(config: Config, reference_date: date) -> Outcome:
    """Determines which group is on duty on a date.

    Args:
        config: A configuration built by `build`. Whether it has been
            checked with `validate` does not matter here; overlapping
            windows are reported as a `Conflict`.
        reference_date: The date to resolve. This is never read from
            the clock.

    Returns:
        `NoActiveGroup`, `ActiveGroup` or `Conflict`.
    """
    names = covering_groups(config, reference_date)
    if not names:
        return NoActiveGroup()
    if len(names) == 1:
        return ActiveGroup(names[0])
    return Conflict(tuple(names))
