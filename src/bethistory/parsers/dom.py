"""Thin node interface over BeautifulSoup tags.

Extraction code only needs attribute lookup, text, CSS selection and
"children/descendants matching a predicate". Keeping that surface small
means a book adapter only has to supply predicates and selectors.
"""
from __future__ import annotations

import copy
import re
from typing import Callable, Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

NodePredicate = Callable[["Node"], bool]


def _text(el: Optional[Tag]) -> str:
    return re.sub(r"\s+", " ", el.get_text(" ", strip=True)) if el else ""


class Node:
    """Read-only view of one element in a parsed markup tree."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Node) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"Node(<{self.tag.name}>)"

    @property
    def name(self) -> str:
        return self.tag.name or ""

    def attr(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        return _text(self.tag)

    @property
    def parent(self) -> Optional["Node"]:
        parent = self.tag.parent
        if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
            return Node(parent)
        return None

    def children(self) -> List["Node"]:
        return [Node(c) for c in self.tag.children if isinstance(c, Tag)]

    def children_matching(self, predicate: NodePredicate) -> List["Node"]:
        return [c for c in self.children() if predicate(c)]

    def descendants(self) -> Iterator["Node"]:
        for el in self.tag.descendants:
            if isinstance(el, Tag):
                yield Node(el)

    def descendants_matching(self, predicate: NodePredicate) -> List["Node"]:
        return [d for d in self.descendants() if predicate(d)]

    def select(self, selector: str) -> List["Node"]:
        return [Node(el) for el in self.tag.select(selector)]

    def select_one(self, selector: str) -> Optional["Node"]:
        el = self.tag.select_one(selector)
        return Node(el) if el is not None else None

    def closest(self, predicate: NodePredicate, stop: Optional["Node"] = None) -> Optional["Node"]:
        """Nearest proper ancestor matching predicate, not searching past stop."""
        cur = self.parent
        while cur is not None:
            if stop is not None and cur == stop:
                return cur if predicate(cur) else None
            if predicate(cur):
                return cur
            cur = cur.parent
        return None


def attr_prefix(attribute: str, prefix: str) -> NodePredicate:
    """Predicate: attribute value starts with prefix."""
    def _match(node: Node) -> bool:
        value = node.attr(attribute)
        return bool(value) and value.startswith(prefix)
    return _match



def merge_nodes(*nodes: Node, name: str = "div") -> Node:
    """Detached element holding copies of nodes, in order.

    Used when one wager is spread over sibling rows; the source tree is
    left untouched.
    """
    wrapper = BeautifulSoup("", "lxml").new_tag(name)
    for node in nodes:
        wrapper.append(copy.copy(node.tag))
    return Node(wrapper)
