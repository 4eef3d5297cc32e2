"""Remove potentially over exposing link shares.

A historical bug allowed a link share to be created as a re-share of a
user or group share on the same item, silently granting link access to
something that was only meant for specific users. This repair step deletes
those link shares and notifies everyone involved, plus all administrators.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Set

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Connection, Engine

from sharerepair.clock import Clock, SystemClock
from sharerepair.config_loader import SystemConfig
from sharerepair.database.models import (
    Share,
    SHARE_TYPE_GROUP,
    SHARE_TYPE_LINK,
    SHARE_TYPE_USER,
)
from sharerepair.groups import GroupManager
from sharerepair.notifications import NotificationManager
from sharerepair.output import RepairOutput
from sharerepair.versioning import version_compare

logger = logging.getLogger(__name__)

shares = Share.__table__


class AffectedShare(NamedTuple):
    id: int
    uid_owner: str
    uid_initiator: Optional[str]


class RepairState(str, Enum):
    IDLE = "idle"
    GATED = "gated"
    COUNTING = "counting"
    REMEDIATING = "remediating"
    NOTIFYING_ADMINS = "notifying_admins"
    NOTIFYING = "notifying"
    DONE = "done"
    SKIPPED = "skipped"


class VersionGate:
    """Decides from the version recorded before the upgrade whether to repair."""

    def __init__(self, config: SystemConfig) -> None:
        self._config = config

    def should_run(self) -> bool:
        version_from_before_update = self._config.get_system_value_string("version", "0.0.0")

        # One check per release line; the ranges overlap
        if version_compare(version_from_before_update, "14.0.11", "<"):
            return True
        if version_compare(version_from_before_update, "15.0.8", "<"):
            return True
        if version_compare(version_from_before_update, "16.0.0", "<="):
            return True

        return False


class ShareQueryEngine:
    """Finds link shares that re-share a user or group share of the same item."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def _affected_shares_query(self, *columns: str):
        link = (
            select(shares)
            .where(shares.c.parent.is_not(None))
            .where(shares.c.share_type == SHARE_TYPE_LINK)
            .subquery("s1")
        )
        parent = shares.alias("s2")

        return (
            select(*(link.c[column] for column in columns))
            .select_from(link.join(parent, link.c.parent == parent.c.id))
            .where(parent.c.share_type.in_([SHARE_TYPE_USER, SHARE_TYPE_GROUP]))
            .where(link.c.item_source == parent.c.item_source)
        )

    def count_affected(self) -> int:
        affected = self._affected_shares_query("id").subquery("affected")
        query = select(func.count().label("total")).select_from(affected)
        total = self._connection.execute(query).scalar_one()
        return int(total)

    @contextmanager
    def stream_affected(self) -> Iterator[Iterator[AffectedShare]]:
        """Yield an iterator over affected shares; the cursor is closed on exit."""
        result = self._connection.execute(
            self._affected_shares_query("id", "uid_owner", "uid_initiator")
        )
        try:
            yield (
                AffectedShare(row.id, row.uid_owner, row.uid_initiator)
                for row in result
            )
        finally:
            result.close()


class ShareRemediator:
    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def delete_share(self, share_id: int) -> None:
        result = self._connection.execute(delete(shares).where(shares.c.id == share_id))
        if result.rowcount == 0:
            logger.debug("Share already removed id=%s", share_id)
        else:
            logger.debug("Removed share id=%s", share_id)


class NotificationDispatcher:
    """Sends one repair notification to every collected user."""

    APP = "core"
    OBJECT_TYPE = "repair"
    OBJECT_ID = "exposing_links"
    SUBJECT = "repair_exposing_links"

    def __init__(self, notification_manager: NotificationManager, clock: Clock) -> None:
        self._notification_manager = notification_manager
        self._clock = clock

    def add_to_notify(self, users_to_notify: Set[str], uid: Optional[str]) -> None:
        """Add a user to the set. Missing ids (None or "", e.g. no initiator) are skipped."""
        if not uid:
            return
        users_to_notify.add(uid)

    def send_notification(self, users_to_notify: Set[str]) -> None:
        time = self._clock.now()

        notification = (
            self._notification_manager.create_notification()
            .set_app(self.APP)
            .set_date_time(time)
            .set_object(self.OBJECT_TYPE, self.OBJECT_ID)
            .set_subject(self.SUBJECT)
        )

        for uid in sorted(users_to_notify):
            notification.set_user(uid)
            self._notification_manager.notify(notification)

        logger.info("Sent %d repair notifications", len(users_to_notify))


class RemoveLinkShares:
    """Repair step removing link shares that over expose user or group shares."""

    name = "Remove potentially over exposing share links"

    def __init__(
        self,
        engine: Engine,
        config: SystemConfig,
        group_manager: GroupManager,
        notification_manager: NotificationManager,
        clock: Optional[Clock] = None,
        admin_group: str = "admin",
    ) -> None:
        self._engine = engine
        self._gate = VersionGate(config)
        self._group_manager = group_manager
        self._dispatcher = NotificationDispatcher(notification_manager, clock or SystemClock())
        self._admin_group = admin_group
        self.state = RepairState.IDLE

    def _transition(self, state: RepairState) -> None:
        logger.debug("%s: %s -> %s", self.name, self.state.value, state.value)
        self.state = state

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        # Each delete commits on its own so a re-run picks up where a failed run stopped
        with self._engine.connect() as connection:
            connection.execution_options(isolation_level="AUTOCOMMIT")
            yield connection

    def preview(self) -> int:
        """Number of shares a run would remove, without changing anything."""
        if not self._gate.should_run():
            return 0
        with self._connect() as connection:
            return ShareQueryEngine(connection).count_affected()

    def run(self, output: RepairOutput) -> None:
        self.state = RepairState.IDLE
        users_to_notify: Set[str] = set()

        self._transition(RepairState.GATED)
        if not self._gate.should_run():
            self._skip(output)
            return

        with self._connect() as connection:
            queries = ShareQueryEngine(connection)

            self._transition(RepairState.COUNTING)
            total = queries.count_affected()
            if total == 0:
                self._skip(output)
                return

            output.info("Removing potentially over exposing link shares")
            self._repair(output, queries, ShareRemediator(connection), total, users_to_notify)

        self._notify_admins(output, users_to_notify)

        self._transition(RepairState.NOTIFYING)
        output.info("Sending notifications to admins and affected users")
        self._dispatcher.send_notification(users_to_notify)

        self._transition(RepairState.DONE)
        output.info("Removed potentially over exposing link shares")

    def _skip(self, output: RepairOutput) -> None:
        self._transition(RepairState.SKIPPED)
        output.info("No need to remove link shares.")

    def _repair(
        self,
        output: RepairOutput,
        queries: ShareQueryEngine,
        remediator: ShareRemediator,
        total: int,
        users_to_notify: Set[str],
    ) -> None:
        self._transition(RepairState.REMEDIATING)
        output.start_progress(total)

        removed = 0
        with queries.stream_affected() as affected:
            for share in affected:
                self._dispatcher.add_to_notify(users_to_notify, share.uid_owner)
                self._dispatcher.add_to_notify(users_to_notify, share.uid_initiator)
                remediator.delete_share(share.id)
                removed += 1
                output.advance()

        output.finish_progress()
        logger.info("Processed %d of %d affected link shares", removed, total)

    def _notify_admins(self, output: RepairOutput, users_to_notify: Set[str]) -> None:
        self._transition(RepairState.NOTIFYING_ADMINS)

        admin_group = self._group_manager.get(self._admin_group)
        if admin_group is None:
            output.warning(f"Group '{self._admin_group}' not found, no administrators will be notified")
            return

        for user in admin_group.get_users():
            self._dispatcher.add_to_notify(users_to_notify, user.get_uid())
