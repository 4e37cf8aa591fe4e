from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from loguru import logger

from ..common.datetime_utils import format_12h, parse_hhmm, parse_iso_date, today_local
from ..common.validators import require_enum, require_non_empty
from ..core.constants import UPCOMING_EVENTS_LIMIT
from ..core.enums import EventStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity, require_admin, require_authenticated
from ..notifications.service import NotificationService
from .model import EventChanges, MinistryEvent, NewEvent
from .repository import EventRepository


def _hhmm(value: str) -> str:
    return parse_hhmm(value).strftime("%H:%M")


def _optional_text(data: dict, key: str, field_name: str) -> Optional[str]:
    """Present keys must not be blank; absent keys are left untouched."""

    if key not in data:
        return None
    return require_non_empty(data.get(key), field_name)


class EventService:
    """Use cases: the ministry event catalog."""

    def __init__(
        self,
        events: EventRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._events = events
        self._notifications = notifications
        self._clock = clock

    def _require(self, event_id: int) -> MinistryEvent:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Event not found")
        return event

    def list_events(self, caller: Identity) -> list[MinistryEvent]:
        require_authenticated(caller)
        return list(self._events.list_events())

    def upcoming(self, *, limit: int = UPCOMING_EVENTS_LIMIT) -> list[MinistryEvent]:
        return list(self._events.list_events(start=self._clock(), status=EventStatus.SCHEDULED, limit=limit))

    def create_event(
        self,
        caller: Identity,
        *,
        title: str,
        event_date: str,
        event_time: str,
        conductor: str,
        purpose: str,
        location: Optional[str] = None,
    ) -> MinistryEvent:
        admin = require_admin(caller)
        if not all([title, event_date, event_time, conductor, purpose]):
            raise ValidationError("All fields are required")

        new = NewEvent(
            title=require_non_empty(title, "Title"),
            event_date=parse_iso_date(event_date),
            event_time=_hhmm(event_time),
            conductor=require_non_empty(conductor, "Conductor"),
            purpose=require_non_empty(purpose, "Purpose"),
            location=(location or "").strip() or None,
            created_by=admin.user_id,
        )
        event = self._require(self._events.create(new))

        self._notifications.notify_event(event.title, event.event_date.isoformat(), format_12h(event.event_time))
        logger.info(f"Event {event.event_id} '{event.title}' created by admin {admin.user_id}")
        return event

    def update_event(self, caller: Identity, event_id: int, data: dict) -> MinistryEvent:
        require_admin(caller)
        event = self._require(event_id)

        date_value = data.get("date", data.get("eventDate"))
        time_value = data.get("time", data.get("eventTime"))
        status = data.get("status")
        changes = EventChanges(
            title=_optional_text(data, "title", "Title"),
            event_date=parse_iso_date(date_value) if date_value else None,
            event_time=_hhmm(time_value) if time_value else None,
            conductor=_optional_text(data, "conductor", "Conductor"),
            purpose=_optional_text(data, "purpose", "Purpose"),
            location=(data.get("location") or "").strip() or None,
            status=require_enum(EventStatus, status, "Status") if status else None,
        )

        self._events.update(event.event_id, changes)
        return self._require(event.event_id)

    def cancel_event(self, caller: Identity, event_id: int) -> MinistryEvent:
        admin = require_admin(caller)
        event = self._require(event_id)
        if event.status == EventStatus.CANCELLED:
            return event

        self._events.update(event.event_id, EventChanges(status=EventStatus.CANCELLED))
        self._notifications.notify_schedule_change(
            "Event Cancelled", f"{event.title} on {event.event_date.isoformat()} has been cancelled"
        )
        logger.info(f"Event {event.event_id} cancelled by admin {admin.user_id}")
        return self._require(event.event_id)
