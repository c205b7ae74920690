"""Mapping of resolved groups to member assignments and role payloads."""
from datetime import date
from typing import Dict, List, NamedTuple, Optional, Tuple
from training_manager.constants import DATE_FORMAT, DEFAULT_ROLE
from training_manager.errors import AmbiguousAssignment, AssignmentError
from training_manager.resolve import (ActiveGroup, Conflict, NoActiveGroup,
                                      Outcome)
from training_manager.schemas import Config


class AssignmentResult(NamedTuple):
    """The on-duty group (if any) and its members.

    `conflict` lists the groups that were on duty at once when a
    first-match fallback was used to pick `group`; it is empty otherwise.
    """
    group: Optional[str] = None
    members: Tuple[str, ...] = ()
    conflict: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def active(self) -> bool:
        return self.group is not None


def assign(config: Config,
           outcome: Outcome,
           first_match: bool = False) -> AssignmentResult:
    """Converts a resolution outcome into a member assignment.

    A date with nobody on duty is a valid state and yields an empty
    assignment. When several groups are on duty, no group is chosen
    unless `first_match` is set, in which case the first group in
    declared schedule order wins and the conflict is kept on the result
    (with a warning) for the caller to report.

    Args:
        config: The configuration `outcome` was resolved against.
        outcome: The result of `resolve`.
        first_match: Resolves conflicts in favor of the first group.

    Returns:
        The assignment.

    Raises:
        AmbiguousAssignment: If several groups are on duty and
            `first_match` is not set.
    """
    if isinstance(outcome, NoActiveGroup):
        return AssignmentResult()
    if isinstance(outcome, ActiveGroup):
        return AssignmentResult(group=outcome.name,
                                members=config.groups[outcome.name])
    if isinstance(outcome, Conflict):
        names = ', '.join(f'"{name}"' for name in outcome.names)
        if not first_match:
            raise AmbiguousAssignment(
                f'Groups {names} are on duty at the same time.',
                outcome.names)
        chosen = outcome.names[0]
        return AssignmentResult(
            group=chosen,
            members=config.groups[chosen],
            conflict=outcome.names,
            warnings=(f'Groups {names} are on duty at the same time; '
                      f'using "{chosen}".', ))
    raise AssignmentError(f'Unknown resolution outcome {outcome!r}.')


def format_result(result: AssignmentResult, reference_date: date) -> Dict:
    """Converts an assignment to a JSON-serializable dictionary."""
    return {
        'date': reference_date.strftime(DATE_FORMAT),
        'active': result.active,
        'group': result.group,
        'members': list(result.members),
        'conflict': list(result.conflict),
        'warnings': list(result.warnings)
    }


def role_payloads(config: Config,
                  result: AssignmentResult,
                  role: str = DEFAULT_ROLE) -> List[Dict]:
    """Builds group update payloads for the routing layer.

    Every declared group gets a payload with its members, so that the
    role is granted to the on-duty group and revoked from all others.

    Args:
        config: The configuration the assignment was made from.
        result: The assignment.
        role: The name of the role granted to the on-duty group.

    Returns:
        One payload per group, in declared order, each with `name`,
        `members` and `roles` fields.
    """
    return [{
        'name': name,
        'members': list(members),
        'roles': [role] if name == result.group else []
    } for name, members in config.groups.items()]
