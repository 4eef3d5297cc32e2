from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from sharerepair.database import Base, Group, NotificationRecord, Share, User, create_db_engine


@pytest.fixture(autouse=True)
def _clear_version_override(monkeypatch) -> None:
    monkeypatch.delenv("SHAREREPAIR_VERSION", raising=False)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'shares.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def add_share(session_factory):
    def _add(share_type: int, item_source: str, uid_owner: str = "owner", **kwargs) -> int:
        db = session_factory()
        try:
            share = Share(share_type=share_type, item_source=item_source, uid_owner=uid_owner, **kwargs)
            db.add(share)
            db.commit()
            return share.id
        finally:
            db.close()

    return _add


@pytest.fixture
def add_group(session_factory):
    def _add(gid: str, uids: list[str]) -> None:
        db = session_factory()
        try:
            group = Group(gid=gid, display_name=gid)
            for uid in uids:
                user = db.get(User, uid) or User(uid=uid, display_name=uid)
                group.users.append(user)
            db.add(group)
            db.commit()
        finally:
            db.close()

    return _add


@pytest.fixture
def share_ids(engine):
    def _ids() -> set[int]:
        with engine.connect() as connection:
            return set(connection.execute(select(Share.__table__.c.id)).scalars())

    return _ids


@pytest.fixture
def notified_users(engine):
    def _users() -> list[str]:
        table = NotificationRecord.__table__
        with engine.connect() as connection:
            return sorted(connection.execute(select(table.c.user)).scalars())

    return _users
