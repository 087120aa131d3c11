"""Join admission and approval transitions."""

from dataclasses import replace
from enum import StrEnum

from event_snaps.domain.events import EventRecord


class JoinDecision(StrEnum):
    """Outcome of a join attempt."""

    ALREADY_PARTICIPANT = "already_participant"
    ALREADY_PENDING = "already_pending"
    ADMIT = "admit"
    ENQUEUE = "enqueue"


class MemberRole(StrEnum):
    """A user's relationship to an event."""

    OWNER = "owner"
    PARTICIPANT = "participant"
    PENDING = "pending"
    NONE = "none"


def member_role(event: EventRecord, user_id: str) -> MemberRole:
    """Return how ``user_id`` relates to the event."""
    if user_id == event.owner_id:
        return MemberRole.OWNER
    if user_id in event.participants:
        return MemberRole.PARTICIPANT
    if user_id in event.pending_approvals:
        return MemberRole.PENDING
    return MemberRole.NONE


def decide_join(event: EventRecord, user_id: str) -> JoinDecision:
    """Decide how a join attempt by ``user_id`` is handled."""
    if user_id in event.participants or user_id == event.owner_id:
        return JoinDecision.ALREADY_PARTICIPANT
    if user_id in event.pending_approvals:
        return JoinDecision.ALREADY_PENDING
    if event.require_approval:
        return JoinDecision.ENQUEUE
    return JoinDecision.ADMIT


def apply_join(event: EventRecord, user_id: str, decision: JoinDecision) -> EventRecord:
    """Return the event state after acting on a join decision."""
    if decision is JoinDecision.ADMIT:
        return replace(event, participants=event.participants | {user_id})
    if decision is JoinDecision.ENQUEUE:
        return replace(event, pending_approvals=event.pending_approvals | {user_id})
    return event


def is_pending(event: EventRecord, user_id: str) -> bool:
    """Return True when ``user_id`` awaits an owner decision."""
    return user_id in event.pending_approvals


def approve(event: EventRecord, user_id: str) -> EventRecord:
    """Move a pending user into the participants set.

    Returns the event unchanged when the user is not pending.
    """
    if not is_pending(event, user_id):
        return event
    return replace(
        event,
        participants=event.participants | {user_id},
        pending_approvals=event.pending_approvals - {user_id},
    )


def reject(event: EventRecord, user_id: str) -> EventRecord:
    """Drop a pending request. The user may request again later."""
    if not is_pending(event, user_id):
        return event
    return replace(event, pending_approvals=event.pending_approvals - {user_id})


def is_participant(event: EventRecord, user_id: str) -> bool:
    """Return True for admitted users and the owner."""
    return user_id == event.owner_id or user_id in event.participants
