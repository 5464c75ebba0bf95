import logging

from docfolio.domain.navigation import NavNode, build_nav_tree


def page(id, parent=None, order=0, **extra):
    return {"id": id, "parent_id": parent, "order": order, **extra}


def ids(nodes):
    return [node.id for node in nodes]


def flatten(nodes):
    for node in nodes:
        yield node
        yield from flatten(node.children)


def test_roots_and_children_are_sorted_by_order():
    tree = build_nav_tree([
        page("a", order=1),
        page("b", parent="a", order=0),
        page("c", order=0),
    ])

    assert ids(tree) == ["c", "a"]
    assert ids(tree[1].children) == ["b"]
    assert tree[0].children == []


def test_orphan_is_promoted_to_root():
    tree = build_nav_tree([page("x", parent="missing")])

    assert ids(tree) == ["x"]


def test_ties_keep_input_order():
    tree = build_nav_tree([page("p2"), page("p1")])

    assert ids(tree) == ["p2", "p1"]


def test_child_ties_keep_input_order():
    tree = build_nav_tree([
        page("root"),
        page("c3", parent="root", order=2),
        page("c1", parent="root", order=1),
        page("c2", parent="root", order=1),
    ])

    assert ids(tree[0].children) == ["c1", "c2", "c3"]


def test_child_listed_before_parent_is_attached():
    tree = build_nav_tree([
        page("leaf", parent="mid"),
        page("mid", parent="top"),
        page("top"),
    ])

    assert ids(tree) == ["top"]
    assert ids(tree[0].children) == ["mid"]
    assert ids(tree[0].children[0].children) == ["leaf"]


def test_hidden_parent_promotes_visible_children():
    # admin-only "secret" was filtered out before the build
    tree = build_nav_tree([
        page("public", order=0),
        page("under-secret", parent="secret", order=1),
    ])

    assert ids(tree) == ["public", "under-secret"]


def test_every_page_appears_exactly_once():
    pages = [
        page("a"),
        page("b", parent="a", order=3),
        page("c", parent="a", order=1),
        page("d", parent="c"),
        page("e", parent="gone"),
        page("f", parent="d", order=-1),
    ]

    found = ids(flatten(build_nav_tree(pages)))

    assert sorted(found) == sorted(p["id"] for p in pages)
    assert len(found) == len(set(found))


def test_build_is_idempotent():
    pages = [page("a", order=2), page("b", parent="a"), page("c", order=1)]

    first = [node.to_dict() for node in build_nav_tree(pages)]
    second = [node.to_dict() for node in build_nav_tree(pages)]

    assert first == second


def test_input_is_not_mutated():
    pages = [page("a"), page("b", parent="a")]
    snapshot = [dict(p) for p in pages]

    build_nav_tree(pages)

    assert pages == snapshot


def test_missing_order_sorts_as_zero():
    tree = build_nav_tree([
        {"id": "later", "order": 1},
        {"id": "unordered"},
    ])

    assert ids(tree) == ["unordered", "later"]


def test_empty_input():
    assert build_nav_tree([]) == []


def test_two_page_cycle_is_broken(caplog):
    with caplog.at_level(logging.WARNING, logger="docfolio.domain.navigation"):
        tree = build_nav_tree([
            page("a", parent="b"),
            page("b", parent="a"),
        ])

    found = ids(flatten(tree))
    assert sorted(found) == ["a", "b"]
    assert len(tree) == 1
    assert len(tree[0].children) == 1
    assert "parent cycle" in caplog.text


def test_self_parent_is_shown_as_root():
    tree = build_nav_tree([page("loop", parent="loop"), page("ok", order=1)])

    assert ids(tree) == ["loop", "ok"]
    assert tree[0].children == []


def test_subtree_hanging_off_a_cycle_is_kept():
    tree = build_nav_tree([
        page("a", parent="c"),
        page("b", parent="a"),
        page("c", parent="b"),
        page("tail", parent="b", order=5),
    ])

    found = ids(flatten(tree))
    assert sorted(found) == ["a", "b", "c", "tail"]
    assert len(found) == 4
    assert len(tree) == 1


def test_display_title_prefers_native_when_present():
    node = NavNode(page={"id": "a", "title": "About", "title_native": "Մեր մասին"})
    bare = NavNode(page={"id": "b", "title": "Blog", "title_native": None})

    assert node.display_title("native") == "Մեր մասին"
    assert node.display_title("english") == "About"
    assert bare.display_title("native") == "Blog"


def test_to_dict_nests_children_with_display_titles():
    tree = build_nav_tree([
        page("a", title="A", title_native="Ա"),
        page("b", parent="a", title="B"),
    ])

    data = tree[0].to_dict("native")

    assert data["display_title"] == "Ա"
    assert data["children"][0]["display_title"] == "B"
    assert data["children"][0]["children"] == []
