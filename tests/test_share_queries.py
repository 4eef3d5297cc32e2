import pytest
from sqlalchemy.exc import ResourceClosedError

from sharerepair.database import SHARE_TYPE_GROUP, SHARE_TYPE_LINK, SHARE_TYPE_USER
from sharerepair.repair.remove_link_shares import AffectedShare, ShareQueryEngine, ShareRemediator


def _affected(engine) -> tuple[int, list[AffectedShare]]:
    with engine.connect() as connection:
        queries = ShareQueryEngine(connection)
        with queries.stream_affected() as rows:
            streamed = list(rows)
        return queries.count_affected(), streamed


def test_link_reshare_of_user_share_is_affected(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X", uid_owner="alice", share_with="bob")
    link = add_share(SHARE_TYPE_LINK, "X", uid_owner="bob", uid_initiator="carol", parent=parent)

    total, streamed = _affected(engine)

    assert total == 1
    assert streamed == [AffectedShare(link, "bob", "carol")]


def test_link_reshare_of_group_share_is_affected(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_GROUP, "X", share_with="staff")
    link = add_share(SHARE_TYPE_LINK, "X", parent=parent)

    total, streamed = _affected(engine)

    assert total == 1
    assert [share.id for share in streamed] == [link]


def test_different_item_source_is_ignored(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_LINK, "Y", parent=parent)

    assert _affected(engine) == (0, [])


def test_link_share_without_parent_is_ignored(engine, add_share) -> None:
    add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_LINK, "X")

    assert _affected(engine) == (0, [])


def test_link_share_below_link_share_is_ignored(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_LINK, "X")
    add_share(SHARE_TYPE_LINK, "X", parent=parent)

    assert _affected(engine) == (0, [])


def test_parent_with_other_share_type_is_ignored(engine, add_share) -> None:
    parent = add_share(4, "X")
    add_share(SHARE_TYPE_LINK, "X", parent=parent)

    assert _affected(engine) == (0, [])


def test_user_reshare_is_not_affected(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_USER, "X", parent=parent)

    assert _affected(engine) == (0, [])


def test_only_unsafe_rows_among_many(engine, add_share) -> None:
    user_share = add_share(SHARE_TYPE_USER, "doc1")
    group_share = add_share(SHARE_TYPE_GROUP, "doc2")
    unsafe_a = add_share(SHARE_TYPE_LINK, "doc1", parent=user_share)
    unsafe_b = add_share(SHARE_TYPE_LINK, "doc2", parent=group_share)
    add_share(SHARE_TYPE_LINK, "doc3", parent=user_share)
    add_share(SHARE_TYPE_LINK, "doc1")

    total, streamed = _affected(engine)

    assert total == 2
    assert sorted(share.id for share in streamed) == sorted([unsafe_a, unsafe_b])


def test_counting_is_repeatable(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_LINK, "X", parent=parent)

    with engine.connect() as connection:
        queries = ShareQueryEngine(connection)
        assert queries.count_affected() == queries.count_affected() == 1


def test_stream_cursor_closed_after_block(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_LINK, "X", parent=parent)

    with engine.connect() as connection:
        with ShareQueryEngine(connection).stream_affected() as rows:
            pass

        with pytest.raises(ResourceClosedError):
            list(rows)


def test_stream_cursor_closed_when_block_raises(engine, add_share) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    add_share(SHARE_TYPE_LINK, "X", parent=parent)

    with engine.connect() as connection:
        with pytest.raises(RuntimeError):
            with ShareQueryEngine(connection).stream_affected() as rows:
                raise RuntimeError("boom")

        with pytest.raises(ResourceClosedError):
            list(rows)


def test_delete_share_removes_only_that_row(engine, add_share, share_ids) -> None:
    parent = add_share(SHARE_TYPE_USER, "X")
    link = add_share(SHARE_TYPE_LINK, "X", parent=parent)

    with engine.begin() as connection:
        ShareRemediator(connection).delete_share(link)

    assert share_ids() == {parent}


def test_delete_share_is_idempotent(engine, add_share, share_ids) -> None:
    share = add_share(SHARE_TYPE_LINK, "X")

    with engine.begin() as connection:
        remediator = ShareRemediator(connection)
        remediator.delete_share(share)
        remediator.delete_share(share)
        remediator.delete_share(999)

    assert share_ids() == set()
