# docfolio/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from flask import current_app, request

from docfolio.content_store import auth

LANGUAGES = ("english", "native")
LANGUAGE_QUERY_PARAM = "lang"
LANGUAGE_HEADER = "X-Language"


@dataclass(frozen=True)
class ViewerContext:
    """
    Who is looking and in which language.

    Built once per request and passed to every service that filters or
    localizes content.
    """

    user: Any = None
    language: str = "english"

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def localize(self, item: Any, field: str) -> Any:
        """`<field>_native` when viewing natively and it is set, else `<field>`."""
        if self.language == "native":
            native = _value(item, f"{field}_native")
            if native:
                return native
        return _value(item, field)


def _value(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def normalize_language(value: Optional[str]) -> str:
    value = (value or "").strip().lower()
    return value if value in LANGUAGES else ""


def request_language() -> str:
    lang = normalize_language(request.args.get(LANGUAGE_QUERY_PARAM))
    if lang:
        return lang

    lang = normalize_language(request.headers.get(LANGUAGE_HEADER))
    if lang:
        return lang

    return normalize_language(current_app.config.get("DEFAULT_LANGUAGE")) or "english"


def viewer_context(store) -> ViewerContext:
    return ViewerContext(
        user=auth.current_user(store),
        language=request_language(),
    )
