"""SQLAlchemy models for shares, the group directory and notifications."""

from datetime import datetime
from typing import List

from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, SmallInteger, Table
)
from sqlalchemy.orm import relationship

from sharerepair.database.base import Base


SHARE_TYPE_USER = 1
SHARE_TYPE_GROUP = 2
SHARE_TYPE_LINK = 3


class Share(Base):
    """A share of one resource (item_source) to a user, a group or a public link."""
    __tablename__ = "share"

    id = Column(Integer, primary_key=True, autoincrement=True)
    share_type = Column(SmallInteger, nullable=False, default=0)
    share_with = Column(String(255), nullable=True)

    # Re-shares point at the share they were derived from, no DB constraint
    parent = Column(Integer, nullable=True, index=True)

    item_type = Column(String(64), nullable=False, default="file")
    item_source = Column(String(255), nullable=True, index=True)
    file_source = Column(Integer, nullable=True)
    file_target = Column(String(512), nullable=True)
    permissions = Column(SmallInteger, nullable=False, default=0)

    uid_owner = Column(String(64), nullable=False)
    uid_initiator = Column(String(64), nullable=True)

    token = Column(String(32), nullable=True, index=True)  # Link shares only
    stime = Column(DateTime, nullable=False, default=datetime.utcnow)
    expiration = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Share(id={self.id}, share_type={self.share_type}, item_source={self.item_source}, parent={self.parent})>"


group_user = Table(
    "group_user",
    Base.metadata,
    Column("gid", String(64), ForeignKey("groups.gid", ondelete="CASCADE"), primary_key=True),
    Column("uid", String(64), ForeignKey("users.uid", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    """Account known to the group directory."""
    __tablename__ = "users"

    uid = Column(String(64), primary_key=True)
    display_name = Column(String(255), nullable=True)

    groups = relationship("Group", secondary=group_user, back_populates="users")

    def get_uid(self) -> str:
        return self.uid

    def __repr__(self):
        return f"<User(uid={self.uid})>"


class Group(Base):
    """Group of users, e.g. the administrators group."""
    __tablename__ = "groups"

    gid = Column(String(64), primary_key=True)
    display_name = Column(String(255), nullable=True)

    users = relationship("User", secondary=group_user, back_populates="groups", order_by="User.uid")

    def get_users(self) -> List[User]:
        return list(self.users)

    def __repr__(self):
        return f"<Group(gid={self.gid})>"


class NotificationRecord(Base):
    """Notification queued for delivery to one user."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app = Column(String(32), nullable=False)
    user = Column(String(64), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False)
    object_type = Column(String(64), nullable=False)
    object_id = Column(String(64), nullable=False)
    subject = Column(String(64), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<NotificationRecord(id={self.id}, user={self.user}, subject={self.subject})>"
