"""
Coalescing of adjacent inline spoiler elements.

The converter emits one element per formatting run, so a spoiler spanning
bold and plain text comes out as ``<strong class="inline-spoilers">`` next
to ``<span class="inline-spoilers">``. Revealing a spoiler must toggle the
whole region at once, hence every run of two or more adjacent spoiler
elements is rewritten into a single ``<span class="inline-spoilers">``.

Adjacency is judged over element siblings: text and comment nodes between
two spoiler elements do not split a run. Only the members are rewritten;
such nodes stay in the parent, after the wrapper.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

__all__ = [
    "SPOILER_CLASS",
    "INLINE_GROUP",
    "ElementArena",
    "SpoilerMergeError",
    "compact_spoilers",
    "merge_spoilers_after_render",
]

SPOILER_CLASS = "inline-spoilers"
INLINE_GROUP = "inline-group"
_WRAPPER_TAG = "span"


class SpoilerMergeError(AssertionError):
    """A spoiler run broke a tree invariant (member without a shared parent)."""


@dataclass
class _ArenaNode:
    tag: Tag
    parent: Optional[int]
    children: List[int] = field(default_factory=list)


class ElementArena:
    """
    Index-based view over the elements of a parsed fragment.

    Node ids follow document order and the root is id ``0``. Parent and
    element-children relations are recorded once, before any mutation, so
    grouping never depends on live sibling pointers.
    """

    def __init__(self, root: Tag) -> None:
        self.nodes: List[_ArenaNode] = []
        ids: Dict[int, int] = {}
        self._add(root, None, ids)
        for tag in root.find_all(True):
            parent_id = ids.get(id(tag.parent))
            if parent_id is None:
                raise SpoilerMergeError(f"<{tag.name}> has no parent in the parsed fragment")
            self._add(tag, parent_id, ids)

    def _add(self, tag: Tag, parent: Optional[int], ids: Dict[int, int]) -> None:
        node_id = len(self.nodes)
        ids[id(tag)] = node_id
        self.nodes.append(_ArenaNode(tag=tag, parent=parent))
        if parent is not None:
            self.nodes[parent].children.append(node_id)

    def tag(self, node_id: int) -> Tag:
        return self.nodes[node_id].tag

    def is_spoiler(self, node_id: int) -> bool:
        if node_id == 0:
            return False
        return SPOILER_CLASS in (self.nodes[node_id].tag.get("class") or [])

    def spoiler_runs(self) -> List[List[int]]:
        """
        Maximal runs of two or more adjacent spoiler elements, as lists of
        node ids, ordered by the id of their first member.
        """
        runs: List[List[int]] = []
        visited_parents = set()
        for node_id in range(len(self.nodes)):
            if not self.is_spoiler(node_id):
                continue
            parent = self.nodes[node_id].parent
            if parent is None:
                raise SpoilerMergeError(f"spoiler element {node_id} has no parent")
            if parent in visited_parents:
                continue
            visited_parents.add(parent)
            runs.extend(self._runs_among(self.nodes[parent].children))
        runs.sort(key=lambda run: run[0])
        return runs

    def _runs_among(self, siblings: List[int]) -> List[List[int]]:
        runs: List[List[int]] = []
        current: List[int] = []
        for node_id in siblings:
            if self.is_spoiler(node_id):
                current.append(node_id)
                continue
            if len(current) > 1:
                runs.append(current)
            current = []
        if len(current) > 1:
            runs.append(current)
        return runs


def _strip_marker(tag: Tag) -> None:
    classes = [c for c in (tag.get("class") or []) if c != SPOILER_CLASS]
    if classes:
        tag["class"] = classes
    else:
        del tag["class"]


def _merge_run(soup: BeautifulSoup, members: List[Tag]) -> None:
    first = members[0]
    parent = first.parent
    if parent is None or any(m.parent is not parent for m in members):
        raise SpoilerMergeError("spoiler run members must share a parent")

    wrapper = soup.new_tag(_WRAPPER_TAG, attrs={"class": SPOILER_CLASS})
    for member in members:
        if member.name == _WRAPPER_TAG:
            for child in list(member.contents):
                wrapper.append(child.extract())
        else:
            clone = copy.copy(member)
            _strip_marker(clone)
            wrapper.append(clone)

    first.replace_with(wrapper)
    for member in members[1:]:
        member.decompose()


def compact_spoilers(html: str) -> str:
    """
    Merge every run of adjacent ``inline-spoilers`` elements in ``html``.

    Returns ``html`` untouched when there is nothing to merge. Runs are
    rewritten from the last to the first in document order, so a run nested
    inside a member is already merged when that member gets cloned.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    arena = ElementArena(soup)
    runs = arena.spoiler_runs()
    if not runs:
        return html
    for run in reversed(runs):
        _merge_run(soup, [arena.tag(node_id) for node_id in run])
    return str(soup)


def merge_spoilers_after_render(group_type: str, html: str) -> str:
    """After-render hook: only inline groups mentioning the marker are parsed."""
    if group_type == INLINE_GROUP and SPOILER_CLASS in html:
        return compact_spoilers(html)
    return html
