"""Event, membership and gallery endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool

from event_snaps.api.auth import get_container, require_identity
from event_snaps.api.models import (  # noqa: TC001
    CreateEventRequest,
    JoinByCodeRequest,
    UploadPlanRequest,
)
from event_snaps.domain.membership import MemberRole
from event_snaps.domain.models import AuthIdentity  # noqa: TC001
from event_snaps.domain.photos import PhotoSource  # noqa: TC001

if TYPE_CHECKING:
    from event_snaps.domain.events import EventRecord
    from event_snaps.domain.models import UserRecord
    from event_snaps.domain.photos import PhotoRecord
    from event_snaps.domain.quota import UploadBatchDecision
    from event_snaps.services.events import EventView
    from event_snaps.services.membership import JoinResult

router = APIRouter(tags=["events"])


@router.post("/events", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: CreateEventRequest,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Create an event owned by the caller."""
    event_service = get_container(request).event_service
    event = event_service.create_event(identity, payload.to_draft())
    return _serialize_view(event_service.describe(event.id, identity.uid))


@router.get("/me/events")
def my_events(
    request: Request, identity: AuthIdentity = Depends(require_identity)
) -> dict[str, object]:
    """Return events the caller created and events they joined."""
    event_service = get_container(request).event_service
    return {
        "owned": [_serialize_summary(e) for e in event_service.list_owned(identity.uid)],
        "joined": [
            _serialize_summary(e) for e in event_service.list_joined(identity.uid)
        ],
    }


@router.post("/events/join")
def join_by_code(
    payload: JoinByCodeRequest,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Join an event using its 6-digit code."""
    membership = get_container(request).membership_service
    return _serialize_join(membership.join_by_code(payload.code, identity.uid))


@router.get("/events/{event_id}")
def get_event(
    event_id: UUID,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Return an event with its status and reveal state."""
    view = get_container(request).event_service.describe(event_id, identity.uid)
    return _serialize_view(view)


@router.post("/events/{event_id}/join")
def join_event(
    event_id: UUID,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Join an event by id, as encoded in its QR code."""
    membership = get_container(request).membership_service
    return _serialize_join(membership.join(event_id, identity.uid))


@router.get("/events/{event_id}/pending")
def list_pending(
    event_id: UUID,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Return users awaiting the owner's approval."""
    membership = get_container(request).membership_service
    users = membership.list_pending(event_id, identity.uid)
    return {"pending": [_serialize_user(user) for user in users]}


@router.post("/events/{event_id}/pending/{user_id}/approve")
def approve_request(
    event_id: UUID,
    user_id: str,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Admit a pending user."""
    membership = get_container(request).membership_service
    return {"approved": membership.approve(event_id, identity.uid, user_id)}


@router.post("/events/{event_id}/pending/{user_id}/reject")
def reject_request(
    event_id: UUID,
    user_id: str,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Drop a pending join request."""
    membership = get_container(request).membership_service
    return {"rejected": membership.reject(event_id, identity.uid, user_id)}


@router.get("/events/{event_id}/photos")
def list_photos(
    event_id: UUID,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Return the gallery once photos are revealed."""
    photos = get_container(request).photo_service.list_photos(event_id, identity.uid)
    return {"photos": [_serialize_photo(photo) for photo in photos]}


@router.post("/events/{event_id}/uploads/plan")
def plan_upload(
    event_id: UUID,
    payload: UploadPlanRequest,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Report how many of the selected gallery photos may be uploaded."""
    photo_service = get_container(request).photo_service
    decision = photo_service.plan_camera_roll_upload(
        event_id, identity.uid, payload.requested_count
    )
    return _serialize_plan(decision)


@router.post("/events/{event_id}/photos", status_code=status.HTTP_201_CREATED)
async def upload_photo(
    event_id: UUID,
    source: PhotoSource,
    request: Request,
    identity: AuthIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Upload one image. The request body is the raw image bytes."""
    content = await request.body()
    photo = await run_in_threadpool(
        get_container(request).photo_service.upload_photo,
        event_id=event_id,
        user_id=identity.uid,
        user_name=identity.label,
        source=source,
        content=content,
        content_type=request.headers.get("content-type", "image/jpeg"),
    )
    return _serialize_photo(photo)


def _serialize_summary(event: EventRecord) -> dict[str, object]:
    return {
        "id": str(event.id),
        "name": event.name,
        "owner_id": event.owner_id,
        "owner_name": event.owner_name,
        "start_time": event.start_time.isoformat(),
        "end_time": event.end_time.isoformat(),
        "cover_image_url": event.cover_image_url,
        "total_photos": event.total_photos,
        "participant_count": len(event.participants),
    }


def _serialize_view(view: EventView) -> dict[str, object]:
    event = view.event
    data = _serialize_summary(event)
    data.update(
        {
            "status": str(view.status),
            "role": str(view.role),
            "can_view_photos": view.can_view_photos,
            "reveal_message": view.reveal_message,
            "reveal_at": view.reveal_at.isoformat() if view.reveal_at else None,
            "require_approval": event.require_approval,
            "reveal_photos": str(event.reveal_photos) if event.reveal_photos else None,
            "reveal_after": str(event.reveal_after) if event.reveal_after else None,
            "max_camera_roll_uploads": event.max_camera_roll_uploads,
            "max_guests": event.max_guests,
        }
    )
    if view.role in {MemberRole.OWNER, MemberRole.PARTICIPANT}:
        data["event_code"] = event.event_code
    if view.role is MemberRole.OWNER:
        data["pending_approvals"] = sorted(event.pending_approvals)
    return data


def _serialize_join(result: JoinResult) -> dict[str, object]:
    return {
        "decision": str(result.decision),
        "event_id": str(result.event_id),
        "message": result.message,
    }


def _serialize_user(user: UserRecord) -> dict[str, object]:
    return {"uid": user.uid, "display_name": user.display_name, "email": user.email}


def _serialize_photo(photo: PhotoRecord) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "event_id": str(photo.event_id),
        "user_id": photo.user_id,
        "user_name": photo.user_name,
        "source": str(photo.source),
        "download_url": photo.download_url,
        "uploaded_at": photo.uploaded_at.isoformat(),
    }


def _serialize_plan(decision: UploadBatchDecision) -> dict[str, object]:
    message = None
    if decision.limited:
        message = (
            f"Uploading {decision.allowed_count} photo(s). "
            "You've reached your gallery limit."
        )
    return {
        "requested_count": decision.requested_count,
        "allowed_count": decision.allowed_count,
        "limited": decision.limited,
        "message": message,
    }
