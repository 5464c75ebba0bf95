import pytest

from docfolio.context import ViewerContext, normalize_language
from docfolio.extensions import db
from docfolio.domain.invariants.exceptions import InvariantViolation
from docfolio.domain.invariants.page import assert_parent, descendant_ids
from docfolio.domain.invariants.portfolio import normalize_quick_stats
from docfolio.domain.invariants.slug import SLUG_PATTERN, slugify
from docfolio.models import User


@pytest.mark.parametrize("title, slug", [
    ("Getting Started", "getting-started"),
    ("  API  v2 -- Reference_Guide ", "api-v2-reference-guide"),
    ("C++ & Rust!", "c-rust"),
    ("Café Résumé", "cafe-resume"),
    (None, ""),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_slugify_transliterates_native_titles():
    slug = slugify("Ներածություն")

    assert slug
    assert SLUG_PATTERN.match(slug)


def test_descendant_ids_breadth_first():
    parents = {"a": None, "b": "a", "c": "a", "d": "b", "x": None}

    assert descendant_ids("a", parents) == ["b", "c", "d"]
    assert descendant_ids("x", parents) == []


def test_assert_parent_tolerates_existing_cycles():
    parents = {"a": "b", "b": "a", "c": None}

    assert_parent("c", "a", parents)


def test_assert_parent_rejects_moves_under_descendants():
    parents = {"a": None, "b": "a"}

    with pytest.raises(InvariantViolation):
        assert_parent("a", "b", parents)


def test_quick_stats_ties_keep_list_position():
    stats = normalize_quick_stats([
        {"icon": "Code", "text": "one", "color": "blue", "order": 1},
        {"icon": "Globe", "text": "two", "color": "pink", "order": 1},
        {"icon": "Award", "text": "zero", "color": "red", "order": 0},
    ])

    assert [(s["text"], s["order"]) for s in stats] == [("zero", 0), ("one", 1), ("two", 2)]


def test_quick_stats_default_to_list_position():
    stats = normalize_quick_stats([
        {"icon": "Code", "text": "first", "color": "blue"},
        {"icon": "Server", "text": "second", "color": "green"},
    ])

    assert [s["text"] for s in stats] == ["first", "second"]
    assert normalize_quick_stats(None) == []


def test_viewer_context_localize():
    section = {"title": "Intro", "title_native": "Ներածություն", "bio": "Hi", "bio_native": ""}
    native = ViewerContext(language="native")

    assert native.localize(section, "title") == "Ներածություն"
    assert native.localize(section, "bio") == "Hi"
    assert ViewerContext().localize(section, "title") == "Intro"


def test_viewer_roles():
    assert not ViewerContext().is_authenticated
    assert ViewerContext(user=User(role="editor")).is_authenticated
    assert User(role="admin").is_admin
    assert not User(role="editor").is_admin


@pytest.mark.parametrize("value, expected", [
    ("Native", "native"),
    (" english ", "english"),
    ("fr", ""),
    (None, ""),
])
def test_normalize_language(value, expected):
    assert normalize_language(value) == expected


def test_create_admin_command(app, store):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-admin", "owner@example.com", "--password", "s3cret-pass"])

    user = store.single("users", eq={"email": "owner@example.com"})
    assert result.exit_code == 0
    assert user.role == "admin"
    assert user.check_password("s3cret-pass")

def test_create_admin_promotes_an_existing_account(app, store):
    editor = User(email="editor@example.com", role="editor")
    editor.set_password("old-password")
    db.session.add(editor)
    db.session.commit()

    result = app.test_cli_runner().invoke(args=["create-admin", "editor@example.com", "--password", "new-password"])

    user = store.single("users", eq={"email": "editor@example.com"})
    assert result.exit_code == 0
    assert user.role == "admin"
    assert user.is_admin
    assert user.check_password("new-password")

