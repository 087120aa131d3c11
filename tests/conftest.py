"""Shared test fixtures."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from event_snaps.adapters.supabase_auth import AuthVerifier
from event_snaps.config import Settings
from event_snaps.containers import AppContainer
from event_snaps.domain import membership
from event_snaps.domain.events import EventRecord
from event_snaps.domain.models import AuthIdentity, UserRecord
from event_snaps.domain.photos import PhotoRecord, PhotoSource
from event_snaps.services.events import EventRepository, EventService
from event_snaps.services.membership import MembershipService
from event_snaps.services.photos import BlobStorage, PhotoRepository, PhotoService
from event_snaps.services.users import UserRepository, UserService

NOW = datetime(2026, 6, 1, 18, 0, tzinfo=UTC)

OWNER = AuthIdentity(uid="owner-1", email="owner@example.com", display_name="Olive")
GUEST = AuthIdentity(uid="guest-1", email="guest@example.com", display_name="Gus")


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_user(self, uid: str) -> UserRecord | None:
        return self.users.get(uid)

    def get_users(self, uids: Iterable[str]) -> list[UserRecord]:
        return [self.users[uid] for uid in uids if uid in self.users]

    def create_user(self, identity: AuthIdentity) -> UserRecord:
        user = UserRecord(
            uid=identity.uid,
            display_name=identity.display_name,
            email=identity.email,
        )
        self.users[identity.uid] = user
        return user

    def add_event_created(self, uid: str, event_id: UUID) -> None:
        user = self.users.get(uid)
        if user:
            self.users[uid] = replace(
                user, events_created=user.events_created | {event_id}
            )

    def add_event_joined(self, uid: str, event_id: UUID) -> None:
        user = self.users.get(uid)
        if user:
            self.users[uid] = replace(user, events_joined=user.events_joined | {event_id})


@dataclass
class InMemoryEventRepository(EventRepository):
    """In-memory event repository applying the membership transitions."""

    events: dict[UUID, EventRecord] = field(default_factory=dict)

    def create_event(self, owner_id: str, payload: dict[str, object]) -> EventRecord:
        event = EventRecord(
            id=uuid4(),
            owner_id=owner_id,
            participants=frozenset({owner_id}),
            **payload,
        )
        self.events[event.id] = event
        return event

    def get_event(self, event_id: UUID) -> EventRecord | None:
        return self.events.get(event_id)

    def find_by_code(self, event_code: str) -> list[EventRecord]:
        return [e for e in self.events.values() if e.event_code == event_code]

    def list_owned(self, owner_id: str) -> list[EventRecord]:
        return [e for e in self.events.values() if e.owner_id == owner_id]

    def list_participating(self, user_id: str) -> list[EventRecord]:
        return [e for e in self.events.values() if user_id in e.participants]

    def add_participant(self, event_id: UUID, user_id: str) -> None:
        event = self.events[event_id]
        self.events[event_id] = membership.apply_join(
            event, user_id, membership.JoinDecision.ADMIT
        )

    def add_pending(self, event_id: UUID, user_id: str) -> None:
        event = self.events[event_id]
        self.events[event_id] = membership.apply_join(
            event, user_id, membership.JoinDecision.ENQUEUE
        )

    def approve_pending(self, event_id: UUID, user_id: str) -> None:
        self.events[event_id] = membership.approve(self.events[event_id], user_id)

    def remove_pending(self, event_id: UUID, user_id: str) -> None:
        self.events[event_id] = membership.reject(self.events[event_id], user_id)

    def increment_total_photos(self, event_id: UUID) -> None:
        event = self.events[event_id]
        self.events[event_id] = replace(event, total_photos=event.total_photos + 1)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: list[PhotoRecord] = field(default_factory=list)
    clock: FixedClock = field(default_factory=FixedClock)

    def create_photo(  # noqa: PLR0913
        self,
        photo_id: UUID,
        event_id: UUID,
        user_id: str,
        user_name: str | None,
        source: PhotoSource,
        download_url: str,
    ) -> PhotoRecord:
        photo = PhotoRecord(
            id=photo_id,
            event_id=event_id,
            user_id=user_id,
            user_name=user_name,
            source=source,
            download_url=download_url,
            uploaded_at=self.clock(),
        )
        self.photos.append(photo)
        return photo

    def list_photos(self, event_id: UUID) -> list[PhotoRecord]:
        matching = [p for p in self.photos if p.event_id == event_id]
        return sorted(matching, key=lambda p: p.uploaded_at, reverse=True)

    def count_camera_roll(self, event_id: UUID, user_id: str) -> int:
        return sum(
            1
            for p in self.photos
            if p.event_id == event_id
            and p.user_id == user_id
            and p.source == PhotoSource.CAMERA_ROLL
        )


@dataclass
class InMemoryBlobStorage(BlobStorage):
    """Blob storage that keeps uploads in a dict."""

    blobs: dict[str, bytes] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.blobs[path] = content
        return f"https://cdn.example.com/{path}"

    def remove(self, path: str) -> None:
        self.blobs.pop(path, None)


@dataclass
class FakeAuthVerifier(AuthVerifier):
    """Resolves tokens from a fixed table."""

    tokens: dict[str, AuthIdentity] = field(default_factory=dict)

    def verify(self, access_token: str) -> AuthIdentity | None:
        return self.tokens.get(access_token)


def make_event(**overrides: object) -> EventRecord:
    """Build an active, open, reveal-during event owned by OWNER."""
    values: dict[str, object] = {
        "id": uuid4(),
        "owner_id": OWNER.uid,
        "name": "Summer Party",
        "start_time": NOW - timedelta(hours=1),
        "end_time": NOW + timedelta(hours=1),
        "event_code": "123456",
        "participants": frozenset({OWNER.uid}),
    }
    values.update(overrides)
    return EventRecord(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    repository = InMemoryUserRepository()
    repository.create_user(OWNER)
    repository.create_user(GUEST)
    return repository


@pytest.fixture
def event_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def photo_repository(clock: FixedClock) -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository(clock=clock)


@pytest.fixture
def blob_storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def event_service(
    event_repository: InMemoryEventRepository,
    user_repository: InMemoryUserRepository,
    clock: FixedClock,
) -> EventService:
    return EventService(
        repository=event_repository,
        user_repository=user_repository,
        clock=clock,
    )


@pytest.fixture
def membership_service(
    event_service: EventService, user_repository: InMemoryUserRepository
) -> MembershipService:
    return MembershipService(event_service=event_service, user_repository=user_repository)


@pytest.fixture
def photo_service(
    event_service: EventService,
    photo_repository: InMemoryPhotoRepository,
    blob_storage: InMemoryBlobStorage,
    clock: FixedClock,
) -> PhotoService:
    return PhotoService(
        event_service=event_service,
        photo_repository=photo_repository,
        blob_storage=blob_storage,
        clock=clock,
    )


@pytest.fixture
def auth_verifier() -> FakeAuthVerifier:
    return FakeAuthVerifier(tokens={"owner-token": OWNER, "guest-token": GUEST})


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    auth_verifier: FakeAuthVerifier,
    user_repository: InMemoryUserRepository,
    event_service: EventService,
    membership_service: MembershipService,
    photo_service: PhotoService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        auth_verifier=auth_verifier,
        user_service=UserService(user_repository),
        event_service=event_service,
        membership_service=membership_service,
        photo_service=photo_service,
    )
