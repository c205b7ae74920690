"""Semantic checks for built schedule configurations."""
from itertools import combinations
from typing import List, NamedTuple, Optional, Tuple
from datetime import date
from training_manager.errors import OverlapError
from training_manager.schemas import Config

ERROR = 'error'
WARNING = 'warning'


class Finding(NamedTuple):
    """A problem found in a configuration.

    Errors block resolution; warnings are informational.
    """
    level: str
    code: str
    message: str
    groups: Tuple[str, ...] = ()
    dates: Optional[Tuple[date, date]] = None

    @property
    def blocking(self) -> bool:
        return self.level == ERROR


def validate(config: Config, allow_overlap: bool = False) -> List[Finding]:
    """Checks a configuration for overlapping windows and suspicious groups.

    Windows of different groups that share at least one date are reported
    as errors, since only one group may be on duty on a given date. With
    `allow_overlap`, they are reported as warnings instead and left for
    the resolver to report as conflicts. Overlapping windows within a
    single group are redundant rather than contradictory and are always
    warnings. Dates covered by no window are permitted and not reported.

    Args:
        config: A configuration built by `build`.
        allow_overlap: Downgrades cross-group overlaps to warnings.

    Returns:
        The findings, in declared schedule order.
    """
    findings = []
    windows = list(config.windows())
    for left, right in combinations(windows, 2):
        shared = left.intersection(right)
        if shared is None:
            continue
        first, last = shared
        if left.group == right.group:
            findings.append(
                Finding(WARNING, 'redundant_window',
                        f'Group "{left.group}" has overlapping windows '
                        f'sharing {first} to {last}.', (left.group, ),
                        shared))
        else:
            findings.append(
                Finding(WARNING if allow_overlap else ERROR, 'overlap',
                        f'Groups "{left.group}" and "{right.group}" are '
                        f'both on duty from {first} to {last}.',
                        (left.group, right.group), shared))

    for name, members in config.groups.items():
        if name not in config.schedule or not config.schedule[name]:
            findings.append(
                Finding(WARNING, 'unscheduled_group',
                        f'Group "{name}" has no schedule windows.', (name, )))
        if not members:
            findings.append(
                Finding(WARNING, 'empty_group',
                        f'Group "{name}" has no members.', (name, )))
        for member in members:
            if member.count('@') != 1:
                findings.append(
                    Finding(WARNING, 'member_format',
                            f'Member "{member}" of group "{name}" is not '
                            'an e-mail address.', (name, )))
    return findings


def raise_for_errors(findings: List[Finding]) -> List[Finding]:
    """Raises on blocking findings; otherwise returns the warnings.

    Raises:
        OverlapError: If any finding is an error. The error carries all
            blocking findings; its message is that of the first one.
    """
    errors = [f for f in findings if f.blocking]
    if errors:
        message = errors[0].message
        if len(errors) > 1:
            message += f' ({len(errors) - 1} more overlap(s).)'
        raise OverlapError(message, errors)
    return [f for f in findings if not f.blocking]
