"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from event_snaps.adapters.supabase_auth import AuthVerifier, SupabaseAuthVerifier
from event_snaps.adapters.supabase_blob_storage import SupabaseBlobStorage
from event_snaps.adapters.supabase_event_repository import SupabaseEventRepository
from event_snaps.adapters.supabase_photo_repository import SupabasePhotoRepository
from event_snaps.adapters.supabase_user_repository import SupabaseUserRepository
from event_snaps.config import Settings
from event_snaps.services.events import EventService
from event_snaps.services.membership import MembershipService
from event_snaps.services.photos import PhotoService
from event_snaps.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_verifier: AuthVerifier
    user_service: UserService
    event_service: EventService
    membership_service: MembershipService
    photo_service: PhotoService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    event_repository = SupabaseEventRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    blob_storage = SupabaseBlobStorage(
        supabase_client, bucket=resolved_settings.storage_bucket
    )

    event_service = EventService(
        repository=event_repository,
        user_repository=user_repository,
        default_camera_roll_uploads=resolved_settings.default_camera_roll_uploads,
        default_max_guests=resolved_settings.default_max_guests,
        code_attempts=resolved_settings.event_code_attempts,
    )
    membership_service = MembershipService(
        event_service=event_service,
        user_repository=user_repository,
    )
    photo_service = PhotoService(
        event_service=event_service,
        photo_repository=photo_repository,
        blob_storage=blob_storage,
    )

    return AppContainer(
        settings=resolved_settings,
        auth_verifier=SupabaseAuthVerifier(supabase_client),
        user_service=UserService(user_repository),
        event_service=event_service,
        membership_service=membership_service,
        photo_service=photo_service,
    )
