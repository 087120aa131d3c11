"""Joining events and owner approval of join requests."""

import logging
from dataclasses import dataclass
from uuid import UUID

from event_snaps.domain.errors import NotEventOwnerError
from event_snaps.domain.events import EventRecord
from event_snaps.domain.membership import JoinDecision, decide_join, is_pending
from event_snaps.domain.models import UserRecord
from event_snaps.services.events import EventService
from event_snaps.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinResult:
    """Outcome of a join attempt."""

    decision: JoinDecision
    event_id: UUID

    @property
    def message(self) -> str:
        """Text shown to the joining user."""
        return _JOIN_MESSAGES[self.decision]


_JOIN_MESSAGES = {
    JoinDecision.ALREADY_PARTICIPANT: "You are already a participant in this event",
    JoinDecision.ALREADY_PENDING: "Your request is pending approval",
    JoinDecision.ENQUEUE: (
        "Your request has been sent. Waiting for approval from the event owner."
    ),
    JoinDecision.ADMIT: "You have joined the event!",
}


@dataclass
class MembershipService:
    """Applies join decisions and owner approvals to storage."""

    event_service: EventService
    user_repository: UserRepository

    def join(self, event_id: UUID, user_id: str) -> JoinResult:
        """Join an event by id, as scanned from its QR code."""
        event = self.event_service.get_event(event_id)
        return self._join(event, user_id)

    def join_by_code(self, code: str, user_id: str) -> JoinResult:
        """Join an event by its 6-digit code."""
        event = self.event_service.resolve_code(code)
        return self._join(event, user_id)

    def approve(self, event_id: UUID, owner_id: str, user_id: str) -> bool:
        """Admit a pending user. Returns False if the user was not pending."""
        event = self._owned_event(event_id, owner_id)
        if not is_pending(event, user_id):
            return False
        self.event_service.repository.approve_pending(event.id, user_id)
        self.user_repository.add_event_joined(user_id, event.id)
        _logger.info("Join approved: event_id=%s user=%s", event.id, user_id)
        return True

    def reject(self, event_id: UUID, owner_id: str, user_id: str) -> bool:
        """Drop a pending request. Returns False if the user was not pending."""
        event = self._owned_event(event_id, owner_id)
        if not is_pending(event, user_id):
            return False
        self.event_service.repository.remove_pending(event.id, user_id)
        _logger.info("Join rejected: event_id=%s user=%s", event.id, user_id)
        return True

    def list_pending(self, event_id: UUID, owner_id: str) -> list[UserRecord]:
        """Return profiles of users awaiting approval."""
        event = self._owned_event(event_id, owner_id)
        if not event.pending_approvals:
            return []
        return self.user_repository.get_users(sorted(event.pending_approvals))

    def _join(self, event: EventRecord, user_id: str) -> JoinResult:
        decision = decide_join(event, user_id)
        repository = self.event_service.repository
        if decision is JoinDecision.ADMIT:
            repository.add_participant(event.id, user_id)
            self.user_repository.add_event_joined(user_id, event.id)
        elif decision is JoinDecision.ENQUEUE:
            repository.add_pending(event.id, user_id)
        _logger.info(
            "Join attempt: event_id=%s user=%s decision=%s", event.id, user_id, decision
        )
        return JoinResult(decision=decision, event_id=event.id)

    def _owned_event(self, event_id: UUID, owner_id: str) -> EventRecord:
        event = self.event_service.get_event(event_id)
        if event.owner_id != owner_id:
            raise NotEventOwnerError("Only the event owner can manage join requests")
        return event
