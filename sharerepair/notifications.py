"""Notifications queued for users.

The repair steps build a :class:`Notification` and hand it to a manager;
the database-backed manager stores one row per submission, delivery
happens out of process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from sharerepair.database.models import NotificationRecord

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    app: Optional[str] = None
    user: Optional[str] = None
    date_time: Optional[datetime] = None
    object_type: Optional[str] = None
    object_id: Optional[str] = None
    subject: Optional[str] = None

    def set_app(self, app: str) -> "Notification":
        self.app = app
        return self

    def set_user(self, user: str) -> "Notification":
        self.user = user
        return self

    def set_date_time(self, date_time: datetime) -> "Notification":
        self.date_time = date_time
        return self

    def set_object(self, object_type: str, object_id: str) -> "Notification":
        self.object_type = object_type
        self.object_id = object_id
        return self

    def set_subject(self, subject: str) -> "Notification":
        self.subject = subject
        return self

    def is_valid(self) -> bool:
        return all((
            self.app,
            self.user,
            self.date_time,
            self.object_type,
            self.object_id,
            self.subject,
        ))


class NotificationManager(Protocol):
    def create_notification(self) -> Notification:
        """Return a new, empty notification."""

    def notify(self, notification: Notification) -> None:
        """Submit the notification for delivery to its user."""


class DatabaseNotificationManager:
    """Stores every submitted notification in the notifications table."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_notification(self) -> Notification:
        return Notification()

    def notify(self, notification: Notification) -> None:
        if not notification.is_valid():
            raise ValueError("The given notification is invalid")

        # Callers may reuse the same instance for the next recipient
        snapshot = replace(notification)

        db = self._session_factory()
        try:
            db.add(NotificationRecord(
                app=snapshot.app,
                user=snapshot.user,
                timestamp=snapshot.date_time,
                object_type=snapshot.object_type,
                object_id=snapshot.object_id,
                subject=snapshot.subject,
            ))
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Storing notification failed user=%s subject=%s", snapshot.user, snapshot.subject)
            raise
        finally:
            db.close()

        logger.debug("Notification queued user=%s subject=%s", snapshot.user, snapshot.subject)
