"""Translation of Supabase client failures into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from supabase import PostgrestAPIError, StorageException

from event_snaps.domain.errors import StorageError


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise PostgREST and Storage failures as StorageError.

    The message keeps the server's own text so callers can show it as is.
    """
    try:
        yield
    except (PostgrestAPIError, StorageException) as exc:
        detail = getattr(exc, "message", None) or str(exc)
        raise StorageError(f"{action} failed: {detail}") from exc
