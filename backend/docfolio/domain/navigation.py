"""Navigation tree builder.

Turns the flat list of page rows visible to a viewer into an ordered
forest for the navigation menu. Pure: no queries, no side effects.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class NavNode:
    """A page row together with its ordered child nodes."""

    page: Dict[str, Any]
    children: List["NavNode"] = field(default_factory=list)

    @property
    def id(self) -> Any:
        return self.page["id"]

    @property
    def order(self) -> int:
        return self.page.get("order") or 0

    def display_title(self, language: str) -> Optional[str]:
        if language == "native" and self.page.get("title_native"):
            return self.page["title_native"]
        return self.page.get("title")

    def to_dict(self, language: Optional[str] = None) -> Dict[str, Any]:
        data = dict(self.page)
        if language is not None:
            data["display_title"] = self.display_title(language)
        data["children"] = [child.to_dict(language) for child in self.children]
        return data


def _sort_key(node: NavNode) -> int:
    return node.order


def build_nav_tree(pages: Sequence[Mapping[str, Any]]) -> List[NavNode]:
    """
    Build the navigation forest from flat page rows.

    - A page whose parent_id is empty or not present in `pages` is a root.
    - Every sibling list, roots included, is sorted ascending by `order`;
      equal orders keep their input order.
    - Every input page ends up in exactly one node, including pages caught
      in a parent cycle (see `_break_cycles`).
    """
    lookup: Dict[Any, NavNode] = {}
    for page in pages:
        lookup[page["id"]] = NavNode(page=dict(page))

    roots: List[NavNode] = []
    parent_of: Dict[Any, NavNode] = {}

    for page in pages:
        node = lookup[page["id"]]
        parent_id = page.get("parent_id")
        parent = lookup.get(parent_id) if parent_id else None

        if parent is not None:
            parent.children.append(node)
            parent_of[node.id] = parent
        else:
            roots.append(node)

    _break_cycles(pages, lookup, roots, parent_of)

    for node in lookup.values():
        if node.children:
            node.children.sort(key=_sort_key)
    roots.sort(key=_sort_key)

    return roots


def _reachable(roots: List[NavNode]) -> set:
    seen = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        stack.extend(node.children)
    return seen


def _break_cycles(
    pages: Sequence[Mapping[str, Any]],
    lookup: Dict[Any, NavNode],
    roots: List[NavNode],
    parent_of: Dict[Any, NavNode],
) -> None:
    """
    Promote one member of each parent cycle to root.

    Nodes unreachable from the roots after attachment either sit on a
    cycle or hang below one. Walking up from such a node always ends on
    a cycle; the first node seen twice is detached from its parent.
    """
    reached = _reachable(roots)
    if len(reached) == len(lookup):
        return

    for page in pages:
        if page["id"] in reached:
            continue

        walked = set()
        node = lookup[page["id"]]
        while node.id not in walked:
            walked.add(node.id)
            node = parent_of[node.id]

        parent = parent_of.pop(node.id)
        parent.children = [child for child in parent.children if child is not node]
        roots.append(node)
        logger.warning("Page %s is part of a parent cycle; showing it as a root", node.id)

        reached |= _reachable([node])
