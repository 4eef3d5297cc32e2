"""Group directory backed by the groups/group_user tables."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session, selectinload

from sharerepair.database.models import Group

logger = logging.getLogger(__name__)


class GroupManager:
    """Looks up groups and their members.

    Members are loaded eagerly so the returned group stays usable after the
    session is closed.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get(self, gid: str) -> Optional[Group]:
        db = self._session_factory()
        try:
            group = (
                db.query(Group)
                .options(selectinload(Group.users))
                .filter(Group.gid == gid)
                .first()
            )
            if group is None:
                logger.debug("Group not found gid=%s", gid)
            return group
        finally:
            db.close()
