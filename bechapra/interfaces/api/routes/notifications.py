"""Endpoints and websocket handler for the notification inbox."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from bechapra.config import get_settings
from bechapra.domain.entities import Notification, NotificationWithEmitter, User
from bechapra.infrastructure.database import SessionLocal, get_db
from bechapra.infrastructure.notifications import notification_manager, serialize_notification
from bechapra.infrastructure.repositories import NotificationRepository
from bechapra.interfaces.api.dependencies import get_current_active_user, resolve_current_user
from bechapra.interfaces.api.schemas import (
    NotificationEmitterRead,
    NotificationEnrichedRead,
    NotificationMarkAllReadResponse,
    NotificationRead,
    NotificationStatisticsRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

_NOT_FOUND = "Notificación no encontrada"


def _resolve_limit(limit: int | None) -> int:
    return limit if limit is not None else get_settings().notification_list_limit


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _enriched_to_schema(item: NotificationWithEmitter) -> NotificationEnrichedRead:
    base = _notification_to_schema(item.notification)
    return NotificationEnrichedRead(
        **base.model_dump(),
        emitter=NotificationEmitterRead(name=item.emitter_name, role=item.emitter_role),
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int | None = Query(None, ge=1, le=500, description="Número máximo de notificaciones"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the inbox of the authenticated user, most urgent first."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id, limit=_resolve_limit(limit)
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/enriched", response_model=list[NotificationEnrichedRead])
def list_enriched_notifications(
    limit: int | None = Query(None, ge=1, le=500, description="Número máximo de notificaciones"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationEnrichedRead]:
    items = NotificationRepository(db).list_enriched_for_user(
        current_user.id, limit=_resolve_limit(limit)
    )
    return [_enriched_to_schema(item) for item in items]


@router.get("/statistics", response_model=NotificationStatisticsRead)
def get_notification_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationStatisticsRead:
    statistics = NotificationRepository(db).get_statistics(current_user.id)
    return NotificationStatisticsRead.model_validate(statistics)


@router.post("/read-all", response_model=NotificationMarkAllReadResponse)
def mark_all_notifications_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkAllReadResponse:
    updated = NotificationRepository(db).mark_all_as_read(current_user.id)
    return NotificationMarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Mark one of the caller's notifications as read. Repeating it is harmless."""

    repository = NotificationRepository(db)
    if repository.get_for_user(notification_id, user_id=current_user.id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)

    repository.mark_as_read([notification_id], user_id=current_user.id)
    notification = repository.get_for_user(notification_id, user_id=current_user.id)
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Elimina una notificación del usuario autenticado."""

    if not NotificationRepository(db).delete_for_user(notification_id, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Usuario inactivo")
        pending_notifications = NotificationRepository(session).list_unread_for_user(
            user.id, limit=get_settings().notification_list_limit
        )
    except HTTPException:
        await websocket.close(code=1008)
        return
    except Exception:
        logger.exception("Error abriendo el websocket de notificaciones")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending_notifications]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_as_read(
                            [item for item in ids if type(item) is int], user_id=user.id
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user.id, websocket)
    except Exception:
        notification_manager.disconnect(user.id, websocket)
        raise
