# docfolio/domain/richtext.py
"""
Rich-text documents as produced by the admin editor.

A document is a tree of typed nodes. Each node kind is its own frozen
dataclass, so a document can be compared structurally and rendered by
dispatching on the node class.

Wire format (persisted as text):

    {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 2}, "content": [
            {"type": "text", "text": "Hello", "marks": [{"type": "bold"}]}
        ]},
        {"type": "image", "attrs": {"src": "...", "width": "50%",
                                    "height": "200px", "alignment": "left"}}
    ]}
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from markupsafe import Markup, escape


class RichTextError(ValueError):
    """Raised for document trees that do not match the node contract."""


HEADING_LEVELS = (1, 2, 3)
ALIGNMENTS = ("left", "center", "right")
MARK_TYPES = ("bold", "italic", "strike", "code", "link")

PERCENTAGE = re.compile(r"^\d+(?:\.\d+)?%$")

# Deeper trees are rejected rather than recursed into
MAX_DEPTH = 64

SAFE_URL_SCHEMES = ("http://", "https://", "mailto:", "/")


# -------------------------------------------------
# Node kinds
# -------------------------------------------------
def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Mark:
    type: str
    attrs: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self):
        if self.type not in MARK_TYPES:
            raise RichTextError(f"Unknown mark: {self.type}")
        if self.type == "link" and not _is_text(self.attr("href")):
            raise RichTextError("Link marks require an href string")

    def attr(self, name: str, default: Any = None) -> Any:
        return dict(self.attrs).get(name, default)


@dataclass(frozen=True)
class Text:
    text: str
    marks: Tuple[Mark, ...] = ()

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text:
            raise RichTextError("Text nodes must carry a non-empty string")


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Paragraph:
    content: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Heading:
    level: int
    content: Tuple["Node", ...] = ()

    def __post_init__(self):
        if not _is_int(self.level) or self.level not in HEADING_LEVELS:
            raise RichTextError(f"Heading level must be one of {HEADING_LEVELS}, got {self.level!r}")


@dataclass(frozen=True)
class ListItem:
    content: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class BulletList:
    content: Tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class OrderedList:
    content: Tuple[ListItem, ...] = ()
    start: int = 1

    def __post_init__(self):
        if not _is_int(self.start):
            raise RichTextError(f"Ordered list start must be an integer, got {self.start!r}")


@dataclass(frozen=True)
class Blockquote:
    content: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    content: Tuple[Text, ...] = ()
    language: Optional[str] = None

    def __post_init__(self):
        if not all(isinstance(child, Text) for child in self.content):
            raise RichTextError("Code blocks may only contain text")
        if self.language is not None and not isinstance(self.language, str):
            raise RichTextError("Code block language must be a string")


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class Image:
    src: str
    alt: Optional[str] = None
    title: Optional[str] = None
    width: str = "100%"
    height: str = "auto"
    alignment: str = "center"

    def __post_init__(self):
        if not _is_text(self.src):
            raise RichTextError("Image nodes require a src string")
        if not _is_text(self.width) or not PERCENTAGE.match(self.width):
            raise RichTextError(f"Image width must be a percentage, got {self.width!r}")
        if not _is_text(self.height):
            raise RichTextError(f"Image height must be a non-empty string, got {self.height!r}")
        for name in ("alt", "title"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise RichTextError(f"Image {name} must be a string")
        if self.alignment not in ALIGNMENTS:
            raise RichTextError(f"Image alignment must be one of {ALIGNMENTS}, got {self.alignment!r}")


@dataclass(frozen=True)
class Doc:
    content: Tuple["Node", ...] = ()


Node = Union[
    Doc,
    Paragraph,
    Heading,
    BulletList,
    OrderedList,
    ListItem,
    Blockquote,
    CodeBlock,
    HorizontalRule,
    HardBreak,
    Image,
    Text,
]

NODE_TYPES = {
    "doc": Doc,
    "paragraph": Paragraph,
    "heading": Heading,
    "bulletList": BulletList,
    "orderedList": OrderedList,
    "listItem": ListItem,
    "blockquote": Blockquote,
    "codeBlock": CodeBlock,
    "horizontalRule": HorizontalRule,
    "hardBreak": HardBreak,
    "image": Image,
    "text": Text,
}

TYPE_NAMES = {cls: name for name, cls in NODE_TYPES.items()}


# -------------------------------------------------
# Image layout
# -------------------------------------------------
def image_style(image: Image) -> str:
    margin = "0 auto" if image.alignment == "center" else "0"
    float_ = "none" if image.alignment == "center" else image.alignment
    return (
        f"width: {image.width}; height: {image.height}; "
        f"display: block; margin: {margin}; float: {float_};"
    )


# -------------------------------------------------
# JSON tree <-> nodes
# -------------------------------------------------
def _content(data: Dict[str, Any], depth: int) -> Tuple[Node, ...]:
    content = data.get("content") or []
    if not isinstance(content, list):
        raise RichTextError("'content' must be a list")
    return tuple(from_json(child, _depth=depth + 1) for child in content)


def _marks(data: Dict[str, Any]) -> Tuple[Mark, ...]:
    marks = data.get("marks") or []
    if not isinstance(marks, list):
        raise RichTextError("'marks' must be a list")

    result = []
    for mark in marks:
        if not isinstance(mark, dict):
            raise RichTextError("Marks must be objects")
        attrs = mark.get("attrs") or {}
        if not isinstance(attrs, dict):
            raise RichTextError("Mark 'attrs' must be an object")
        result.append(Mark(type=mark.get("type"), attrs=tuple(sorted(attrs.items()))))
    return tuple(result)


def from_json(data: Any, _depth: int = 0) -> Node:
    """Build a node tree from its JSON form. Raises RichTextError."""
    if _depth > MAX_DEPTH:
        raise RichTextError(f"Documents may nest at most {MAX_DEPTH} levels")
    if not isinstance(data, dict):
        raise RichTextError("Nodes must be objects")

    kind = data.get("type")
    attrs = data.get("attrs") or {}
    if not isinstance(attrs, dict):
        raise RichTextError("'attrs' must be an object")

    if kind == "text":
        return Text(text=data.get("text"), marks=_marks(data))
    if kind == "heading":
        return Heading(level=attrs.get("level", 1), content=_content(data, _depth))
    if kind == "orderedList":
        return OrderedList(content=_content(data, _depth), start=attrs.get("start", 1))
    if kind == "codeBlock":
        return CodeBlock(content=_content(data, _depth), language=attrs.get("language"))
    if kind == "image":
        return Image(
            src=attrs.get("src"),
            alt=attrs.get("alt"),
            title=attrs.get("title"),
            width=attrs.get("width") or "100%",
            height=attrs.get("height") or "auto",
            alignment=attrs.get("alignment") or "center",
        )
    if kind in ("horizontalRule", "hardBreak"):
        return NODE_TYPES[kind]()
    if kind in ("doc", "paragraph", "bulletList", "listItem", "blockquote"):
        return NODE_TYPES[kind](content=_content(data, _depth))

    raise RichTextError(f"Unknown node type: {kind!r}")


def to_json(node: Node) -> Dict[str, Any]:
    """JSON form of a node tree, in the editor's ordering."""
    kind = TYPE_NAMES.get(type(node))
    if kind is None:
        raise RichTextError(f"Not a rich-text node: {node!r}")

    data: Dict[str, Any] = {"type": kind}

    if isinstance(node, Text):
        data["text"] = node.text
        if node.marks:
            data["marks"] = []
            for mark in node.marks:
                mark_data: Dict[str, Any] = {"type": mark.type}
                if mark.attrs:
                    mark_data["attrs"] = dict(mark.attrs)
                data["marks"].append(mark_data)
        return data

    if isinstance(node, Heading):
        data["attrs"] = {"level": node.level}
    elif isinstance(node, OrderedList):
        data["attrs"] = {"start": node.start}
    elif isinstance(node, CodeBlock):
        data["attrs"] = {"language": node.language}
    elif isinstance(node, Image):
        data["attrs"] = {
            "src": node.src,
            "alt": node.alt,
            "title": node.title,
            "width": node.width,
            "height": node.height,
            "alignment": node.alignment,
        }

    content = getattr(node, "content", ())
    if content:
        data["content"] = [to_json(child) for child in content]

    return data


def serialize(doc: Doc) -> str:
    return json.dumps(to_json(doc), ensure_ascii=False)


def plain_document(text: str) -> Doc:
    """A document holding `text` as a single paragraph."""
    return Doc(content=(Paragraph(content=(Text(text=text),)),))


def parse(raw: Optional[str]) -> Optional[Doc]:
    """
    Parse persisted rich text.

    Empty values give None. Anything that is not a valid document tree
    is shown as plain text inside one paragraph.
    """
    if raw is None or raw == "":
        return None

    try:
        node = from_json(json.loads(raw))
    except (ValueError, TypeError, RecursionError):
        # json.JSONDecodeError and RichTextError are both ValueErrors
        return plain_document(raw)

    if not isinstance(node, Doc):
        return plain_document(raw)
    return node


def coerce(value: Any) -> Optional[Doc]:
    """
    Accept editor input: a JSON tree, a serialized tree or plain text.

    JSON trees are validated strictly and raise RichTextError.
    """
    if value is None or value == "" or value == {}:
        return None
    if isinstance(value, dict):
        node = from_json(value)
        if not isinstance(node, Doc):
            raise RichTextError("Top-level node must be a doc")
        return node
    if isinstance(value, str):
        return parse(value)
    raise RichTextError("Rich text must be a JSON object or a string")


# -------------------------------------------------
# Read-only rendering
# -------------------------------------------------
def _safe_url(url: Optional[str]) -> Optional[str]:
    if isinstance(url, str) and url.strip().lower().startswith(SAFE_URL_SCHEMES):
        return url
    return None


def _render_children(node) -> Markup:
    return Markup("").join(render_html(child) for child in node.content)


def _render_text(node: Text) -> Markup:
    html = escape(node.text)
    for mark in node.marks:
        if mark.type == "bold":
            html = Markup("<strong>%s</strong>") % html
        elif mark.type == "italic":
            html = Markup("<em>%s</em>") % html
        elif mark.type == "strike":
            html = Markup("<s>%s</s>") % html
        elif mark.type == "code":
            html = Markup("<code>%s</code>") % html
        elif mark.type == "link":
            href = _safe_url(mark.attr("href"))
            if href:
                html = Markup('<a href="%s" target="_blank" rel="noopener noreferrer">%s</a>') % (href, html)
    return html


def _render_image(node: Image) -> Markup:
    src = _safe_url(node.src)
    if not src:
        return Markup("")
    return Markup('<img src="%s" alt="%s" title="%s" class="rounded-lg" style="%s">') % (
        src,
        node.alt or "",
        node.title or "",
        image_style(node),
    )


def _render_ordered_list(node: OrderedList) -> Markup:
    if node.start != 1:
        return Markup('<ol start="%d">%s</ol>') % (node.start, _render_children(node))
    return Markup("<ol>%s</ol>") % _render_children(node)


def _render_code_block(node: CodeBlock) -> Markup:
    code = Markup("").join(escape(child.text) for child in node.content)
    if node.language:
        return Markup('<pre><code class="language-%s">%s</code></pre>') % (node.language, code)
    return Markup("<pre><code>%s</code></pre>") % code


def _wrap(tag: str) -> Callable[[Any], Markup]:
    def render(node) -> Markup:
        return Markup("<%s>%s</%s>" % (tag, _render_children(node), tag))
    return render


RENDERERS: Dict[type, Callable[[Any], Markup]] = {
    Doc: _render_children,
    Paragraph: _wrap("p"),
    Heading: lambda node: Markup("<h%d>%s</h%d>") % (node.level, _render_children(node), node.level),
    BulletList: _wrap("ul"),
    OrderedList: _render_ordered_list,
    ListItem: _wrap("li"),
    Blockquote: _wrap("blockquote"),
    CodeBlock: _render_code_block,
    HorizontalRule: lambda node: Markup("<hr>"),
    HardBreak: lambda node: Markup("<br>"),
    Image: _render_image,
    Text: _render_text,
}


def render_html(node: Optional[Node]) -> Markup:
    if node is None:
        return Markup("")
    renderer = RENDERERS.get(type(node))
    if renderer is None:
        raise RichTextError(f"No renderer for {type(node).__name__}")
    return renderer(node)


def plain_text(node: Optional[Node]) -> str:
    """Text content of a document, blocks separated by newlines."""
    if node is None:
        return ""
    if isinstance(node, Text):
        return node.text
    if isinstance(node, HardBreak):
        return "\n"
    if isinstance(node, (Doc, BulletList, OrderedList, ListItem, Blockquote)):
        return "\n".join(filter(None, (plain_text(child) for child in node.content)))
    if isinstance(node, (Paragraph, Heading, CodeBlock)):
        return "".join(plain_text(child) for child in node.content)
    return ""
