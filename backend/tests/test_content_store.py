import pytest

from docfolio.content_store import ChangeFeed, ConstraintViolation, change_feed
from docfolio.content_store.realtime import ChangeEvent


@pytest.fixture
def page_events(store):
    events = []
    subscription = store.subscribe("pages", events.append)
    yield events
    subscription.unsubscribe()


def test_select_filters_and_orders(store, make_page):
    make_page("b", order=2)
    make_page("a", order=1)
    make_page("hidden", order=0, only_for_admin=True)

    public = store.select("pages", eq={"only_for_admin": False}, order=["order"])
    everything = store.select("pages", order=["-order"])

    assert [p.slug for p in public] == ["a", "b"]
    assert [p.slug for p in everything] == ["b", "a", "hidden"]


def test_select_null_membership_and_limit(store, make_page):
    root = make_page("root")
    make_page("child", parent_id=root.id)
    other = make_page("other", order=5)

    roots = store.select("pages", is_null=["parent_id"], order=["order"])
    picked = store.select("pages", in_={"id": [root.id, other.id]}, order=["order"], limit=1)

    assert [p.slug for p in roots] == ["root", "other"]
    assert [p.slug for p in picked] == ["root"]


def test_single_returns_none_when_missing(store):
    assert store.single("pages", eq={"slug": "nope"}) is None


def test_unknown_table_or_column(store):
    with pytest.raises(ValueError):
        store.select("widgets")
    with pytest.raises(ValueError):
        store.select("pages", eq={"colour": "red"})


def test_update_is_last_write_wins(store, make_page):
    page = make_page("about")

    store.update("pages", {"title": "First"}, eq={"id": page.id})
    store.update("pages", {"title": "Second"}, eq={"id": page.id})

    assert store.single("pages", eq={"id": page.id}).title == "Second"


def test_update_and_delete_require_filters(store):
    with pytest.raises(ValueError):
        store.update("pages", {"title": "x"}, eq={})
    with pytest.raises(ValueError):
        store.delete("pages")


def test_duplicate_slug_is_a_constraint_violation(store, make_page):
    make_page("about")

    with pytest.raises(ConstraintViolation):
        make_page("about")

    assert len(store.select("pages")) == 1


def test_delete_returns_ids_and_cascades_sections(store, make_page, make_section):
    page = make_page("guide")
    make_section(page, "intro")
    page_id = page.id

    deleted = store.delete("pages", eq={"id": page_id})

    assert deleted == [page_id]
    assert store.select("sections", eq={"page_id": page_id}) == []


def test_changes_are_published_after_commit(store, make_page, page_events):
    page = make_page("news")
    store.update("pages", {"title": "News!"}, eq={"id": page.id})
    store.delete("pages", eq={"id": page.id})

    assert [(e.type, e.record_id) for e in page_events] == [
        ("INSERT", page.id),
        ("UPDATE", page.id),
        ("DELETE", page.id),
    ]
    assert all(e.schema == "public" and e.table == "pages" for e in page_events)


def test_rolled_back_changes_are_not_published(store, make_page, page_events):
    make_page("news")
    page_events.clear()

    with pytest.raises(ConstraintViolation):
        make_page("news")

    assert page_events == []


def test_subscription_is_scoped_to_table(store, make_page, make_section, page_events):
    page = make_page("scoped")
    page_events.clear()

    make_section(page, "only-a-section")

    assert page_events == []


def test_unsubscribe_stops_delivery(store, make_page):
    events = []
    subscription = store.subscribe("pages", events.append)
    before = change_feed.subscriber_count("pages")

    subscription.unsubscribe()
    make_page("quiet")

    assert events == []
    assert change_feed.subscriber_count("pages") == before - 1


def test_failing_subscriber_does_not_block_others():
    feed = ChangeFeed()
    received = []

    def broken(change):
        raise RuntimeError("boom")

    feed.subscribe("pages", broken)
    feed.subscribe("pages", received.append)

    change = ChangeEvent(schema="public", table="pages", type="INSERT", record_id="1")
    feed.publish(change)

    assert received == [change]


def test_feed_respects_schema():
    feed = ChangeFeed()
    received = []
    feed.subscribe("pages", received.append, schema="archive")

    feed.publish(ChangeEvent(schema="public", table="pages", type="INSERT", record_id="1"))

    assert received == []
