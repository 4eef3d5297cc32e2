"""Database package for the share repair tooling."""

from sharerepair.database.base import Base
from sharerepair.database.session import create_db_engine, get_database_url, normalize_database_url
from sharerepair.database.models import (
    Share,
    User,
    Group,
    NotificationRecord,
    group_user,
    SHARE_TYPE_USER,
    SHARE_TYPE_GROUP,
    SHARE_TYPE_LINK,
)

__all__ = [
    "Base",
    "create_db_engine",
    "get_database_url",
    "normalize_database_url",
    "Share",
    "User",
    "Group",
    "NotificationRecord",
    "group_user",
    "SHARE_TYPE_USER",
    "SHARE_TYPE_GROUP",
    "SHARE_TYPE_LINK",
]
