"""Per-guest camera-roll upload quota."""

from dataclasses import dataclass

from event_snaps.domain.errors import ValidationError
from event_snaps.domain.events import UNLIMITED_UPLOADS


@dataclass(frozen=True)
class UploadBatchDecision:
    """How much of a requested camera-roll batch may proceed."""

    requested_count: int
    allowed_count: int
    limited: bool

    @property
    def limit_reached(self) -> bool:
        """Return True when nothing in a non-empty batch may be uploaded."""
        return self.requested_count > 0 and self.allowed_count == 0


def decide_upload_batch(
    max_camera_roll_uploads: int, already_uploaded_count: int, requested_count: int
) -> UploadBatchDecision:
    """Decide how many of ``requested_count`` gallery photos may be uploaded.

    Only camera-roll uploads are counted; in-app captures never reach this
    function. The count is read before the uploads are written, so concurrent
    batches can overshoot the cap.
    """
    if max_camera_roll_uploads == UNLIMITED_UPLOADS:
        return UploadBatchDecision(
            requested_count=requested_count,
            allowed_count=requested_count,
            limited=False,
        )
    remaining = max(0, max_camera_roll_uploads - already_uploaded_count)
    allowed = min(remaining, requested_count)
    return UploadBatchDecision(
        requested_count=requested_count,
        allowed_count=allowed,
        limited=allowed < requested_count,
    )


def validate_upload_cap(max_camera_roll_uploads: int) -> None:
    """Raise ValidationError unless the cap is positive or unlimited."""
    if max_camera_roll_uploads != UNLIMITED_UPLOADS and max_camera_roll_uploads < 1:
        raise ValidationError(
            "Camera roll uploads must be at least 1, or -1 for unlimited"
        )


def limit_message(max_camera_roll_uploads: int) -> str:
    """Message shown when a guest has no camera-roll uploads left."""
    return (
        f"You can upload up to {max_camera_roll_uploads} photos from your gallery. "
        "You can still take photos with the camera."
    )
