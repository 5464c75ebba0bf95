from docfolio.application.navigation import NavigationFeed, fetch_navigation
from docfolio.content_store import ContentStoreError, change_feed
from docfolio.context import ViewerContext


def titles(tree):
    return [node.page["title"] for node in tree]


def test_fetch_navigation_filters_admin_pages(store, make_page, admin_user):
    make_page("public", title="Public")
    make_page("private", title="Private", only_for_admin=True, order=-1)

    assert titles(fetch_navigation(store, ViewerContext())) == ["Public"]
    assert titles(fetch_navigation(store, ViewerContext(user=admin_user))) == ["Private", "Public"]


def test_fetch_navigation_logs_and_returns_empty_on_failure(store, monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise ContentStoreError("select on pages failed")

    monkeypatch.setattr(store, "select", broken)

    assert fetch_navigation(store, ViewerContext()) == []
    assert "error fetching pages" in caplog.text


def test_feed_rebuilds_tree_after_a_change(store, make_page):
    make_page("first", title="First")

    with NavigationFeed(store, ViewerContext()) as feed:
        assert titles(feed.current_tree()) == ["First"]

        make_page("second", title="Second", order=1)
        tree = feed.next_tree(timeout=1)

    assert titles(tree) == ["First", "Second"]


def test_feed_folds_bursts_into_one_refresh(store, make_page):
    with NavigationFeed(store, ViewerContext()) as feed:
        make_page("a", title="A")
        make_page("b", title="B", order=1)
        page = make_page("c", title="C", order=2)
        store.update("pages", {"parent_id": page.id}, eq={"slug": "a"})

        tree = feed.next_tree(timeout=1)
        quiet = feed.next_tree(timeout=0.01)

    assert titles(tree) == ["B", "C"]
    assert titles(tree[1].children) == ["A"]
    assert quiet is None


def test_feed_times_out_without_changes(store):
    with NavigationFeed(store, ViewerContext()) as feed:
        assert feed.next_tree(timeout=0.01) is None


def test_feed_ignores_section_changes(store, make_page, make_section):
    page = make_page("guide")

    with NavigationFeed(store, ViewerContext()) as feed:
        make_section(page, "intro")
        assert feed.next_tree(timeout=0.01) is None


def test_closing_the_feed_unsubscribes(store):
    before = change_feed.subscriber_count("pages")

    feed = NavigationFeed(store, ViewerContext())
    assert change_feed.subscriber_count("pages") == before + 1

    feed.close()
    assert change_feed.subscriber_count("pages") == before
