"""Proposal action state machine.

Maps ``(current status, action)`` to the resulting status. Some transitions
are reserved for organizers. The machine is pure: callers decide whether and
how to persist the new status.
"""

import enum
from dataclasses import dataclass

from django_confdesk.proposals.models import ProposalStatus


class Action(enum.StrEnum):
    """Actions a speaker or organizer can take on a proposal."""

    SUBMIT = "submit"
    UNSUBMIT = "unsubmit"
    ACCEPT = "accept"
    REJECT = "reject"
    WAITLIST = "waitlist"
    CONFIRM = "confirm"
    WITHDRAW = "withdraw"
    REMIND = "remind"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of applying an action to a proposal status."""

    status: str
    is_valid_action: bool


# Transitions available to everyone with access to the proposal.
_TRANSITIONS: dict[str, dict[str, str]] = {
    ProposalStatus.DRAFT: {
        Action.SUBMIT: ProposalStatus.SUBMITTED,
        Action.DELETE: ProposalStatus.DELETED,
    },
    ProposalStatus.SUBMITTED: {
        Action.UNSUBMIT: ProposalStatus.DRAFT,
    },
    ProposalStatus.ACCEPTED: {
        Action.CONFIRM: ProposalStatus.CONFIRMED,
        Action.WITHDRAW: ProposalStatus.WITHDRAWN,
    },
    ProposalStatus.CONFIRMED: {
        Action.WITHDRAW: ProposalStatus.WITHDRAWN,
    },
    ProposalStatus.WAITLISTED: {
        Action.WITHDRAW: ProposalStatus.WITHDRAWN,
    },
}

# Transitions that only organizers may perform.
_ORGANIZER_TRANSITIONS: dict[str, dict[str, str]] = {
    ProposalStatus.SUBMITTED: {
        Action.ACCEPT: ProposalStatus.ACCEPTED,
        Action.WAITLIST: ProposalStatus.WAITLISTED,
        Action.REJECT: ProposalStatus.REJECTED,
    },
    ProposalStatus.ACCEPTED: {
        Action.REJECT: ProposalStatus.REJECTED,
        Action.REMIND: ProposalStatus.ACCEPTED,
    },
    ProposalStatus.REJECTED: {
        Action.ACCEPT: ProposalStatus.ACCEPTED,
    },
    ProposalStatus.WAITLISTED: {
        Action.ACCEPT: ProposalStatus.ACCEPTED,
        Action.REJECT: ProposalStatus.REJECTED,
    },
}


def action_state_machine(current_status: str | None, action: str, is_organizer: bool = False) -> ActionResult:
    """Apply *action* to a proposal in *current_status*.

    Args:
        current_status: The proposal's current status. ``None`` is treated
            as a draft.
        action: The action being taken.
        is_organizer: Whether the actor is a conference organizer.

    Returns:
        The new status and whether the action was allowed. Disallowed
        actions leave the status unchanged.
    """
    status = current_status or ProposalStatus.DRAFT

    new_status = _TRANSITIONS.get(status, {}).get(action)
    if new_status is None and is_organizer:
        new_status = _ORGANIZER_TRANSITIONS.get(status, {}).get(action)

    if new_status is None:
        return ActionResult(status=status, is_valid_action=False)
    return ActionResult(status=new_status, is_valid_action=True)


def available_actions(current_status: str | None, is_organizer: bool = False) -> list[str]:
    """List the actions that are valid for a proposal in *current_status*."""
    status = current_status or ProposalStatus.DRAFT
    actions = list(_TRANSITIONS.get(status, {}))
    if is_organizer:
        actions.extend(a for a in _ORGANIZER_TRANSITIONS.get(status, {}) if a not in actions)
    return actions
