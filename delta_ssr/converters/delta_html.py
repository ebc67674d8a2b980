"""
Quill delta to HTML conversion.

:class:`DeltaToHtmlConverter` turns a list of delta operations into HTML
without a browser. Text inserts are cut into lines at ``\\n``; the newline
closing a line carries the block attributes (header, list, blockquote,
code-block, align, direction, indent). Lines are then collected into
groups, each rendered on its own:

* ``inline-group`` – consecutive plain lines, rendered as paragraphs
* ``block`` – header, blockquote, code-block and aligned/indented lines
* ``list`` – consecutive list lines of the same list type
* ``video`` – ``{"video": url}`` embeds
* ``custom-block`` – custom embeds promoted with ``renderAsBlock``

Custom embeds are rendered by the function registered with
:meth:`DeltaToHtmlConverter.render_custom_with`; every rendered group can be
rewritten by the hook registered with :meth:`DeltaToHtmlConverter.after_render`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

__all__ = [
    "DeltaToHtmlConverter",
    "DEFAULT_OPTIONS",
    "GROUP_INLINE",
    "GROUP_BLOCK",
    "GROUP_LIST",
    "GROUP_VIDEO",
    "GROUP_CUSTOM_BLOCK",
]

GROUP_INLINE = "inline-group"
GROUP_BLOCK = "block"
GROUP_LIST = "list"
GROUP_VIDEO = "video"
GROUP_CUSTOM_BLOCK = "custom-block"

NEWLINE = "\n"
BR = "<br/>"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "paragraph_tag": "p",
    "multi_line_paragraph": True,
    "multi_line_blockquote": True,
    "multi_line_header": True,
    "multi_line_code_block": True,
    "link_target": "_blank",
    "custom_css_classes": None,
}

CONTAINER_ATTRIBUTES = ("header", "blockquote", "code-block", "align", "direction", "indent")

_INLINE_FORMATS = (
    ("bold", "strong"),
    ("italic", "em"),
    ("strike", "s"),
    ("underline", "u"),
    ("code", "code"),
)

Op = Dict[str, Any]
CustomRenderer = Callable[[Op, Optional[Op]], str]
AfterRenderHook = Callable[[str, str], str]


@dataclass
class _Line:
    ops: List[Op]
    newline: Op

    @property
    def attributes(self) -> Dict[str, Any]:
        return self.newline.get("attributes") or {}


@dataclass
class _Group:
    kind: str
    lines: List[_Line] = field(default_factory=list)
    op: Optional[Op] = None


def _attrs(op: Op) -> Dict[str, Any]:
    return op.get("attributes") or {}


def _is_newline(op: Op) -> bool:
    return op.get("insert") == NEWLINE


def _start_tag(name: str, attrs: Iterable[Tuple[str, Any]] = (), self_closing: bool = False) -> str:
    rendered = "".join(f' {key}="{escape(str(value))}"' for key, value in attrs if value not in (None, ""))
    return f"<{name}{rendered}{'/' if self_closing else ''}>"


def _split_text(op: Op) -> List[Op]:
    """Cut a text insert at newlines; pieces share the original attributes."""
    insert = op["insert"]
    if not isinstance(insert, str) or NEWLINE not in insert or insert == NEWLINE:
        return [op]
    pieces: List[Op] = []
    segments = insert.split(NEWLINE)
    for index, segment in enumerate(segments):
        if segment:
            pieces.append({**op, "insert": segment})
        if index < len(segments) - 1:
            pieces.append({**op, "insert": NEWLINE})
    return pieces


class DeltaToHtmlConverter:
    """Render a list of delta operations to an HTML string."""

    def __init__(self, ops: List[Op], options: Optional[Dict[str, Any]] = None) -> None:
        self.ops = list(ops or [])
        self.options: Dict[str, Any] = {**DEFAULT_OPTIONS, **(options or {})}
        self._custom_renderer: Optional[CustomRenderer] = None
        self._after_render: Optional[AfterRenderHook] = None

    def render_custom_with(self, renderer: CustomRenderer) -> None:
        self._custom_renderer = renderer

    def after_render(self, hook: AfterRenderHook) -> None:
        self._after_render = hook

    # ------------------------- grouping -------------------------
    def _is_block_embed(self, op: Op) -> bool:
        insert = op.get("insert")
        if not isinstance(insert, dict):
            return False
        return "video" in insert or bool(_attrs(op).get("renderAsBlock"))

    def _items(self) -> List[Any]:
        """Lines and block embeds in document order."""
        items: List[Any] = []
        pending: List[Op] = []
        after_block_embed = False
        for source in self.ops:
            for op in _split_text(source):
                if op.get("insert") in ("", None):
                    continue
                if self._is_block_embed(op):
                    if pending:
                        items.append(_Line(pending, {"insert": NEWLINE}))
                        pending = []
                    items.append(op)
                    after_block_embed = True
                    continue
                if _is_newline(op):
                    # The newline ending an embed's own line is not a paragraph.
                    if after_block_embed and not pending and not _attrs(op):
                        after_block_embed = False
                        continue
                    items.append(_Line(pending, op))
                    pending = []
                else:
                    pending.append(op)
                after_block_embed = False
        if pending:
            items.append(_Line(pending, {"insert": NEWLINE}))
        return items

    def _merges_with(self, group: _Group, line: _Line) -> bool:
        previous = group.lines[-1].attributes
        attrs = line.attributes
        if previous != attrs:
            return False
        if "code-block" in attrs:
            return bool(self.options["multi_line_code_block"])
        if "header" in attrs:
            return bool(self.options["multi_line_header"])
        if "blockquote" in attrs:
            return bool(self.options["multi_line_blockquote"])
        return bool(self.options["multi_line_paragraph"])

    def _groups(self) -> List[_Group]:
        groups: List[_Group] = []
        for item in self._items():
            last = groups[-1] if groups else None
            if not isinstance(item, _Line):
                kind = GROUP_VIDEO if "video" in item["insert"] else GROUP_CUSTOM_BLOCK
                groups.append(_Group(kind, op=item))
                continue
            attrs = item.attributes
            if attrs.get("list"):
                if last and last.kind == GROUP_LIST and self._list_tag(last.lines[-1]) == self._list_tag(item):
                    last.lines.append(item)
                else:
                    groups.append(_Group(GROUP_LIST, [item]))
            elif any(attrs.get(key) for key in CONTAINER_ATTRIBUTES):
                if last and last.kind == GROUP_BLOCK and self._merges_with(last, item):
                    last.lines.append(item)
                else:
                    groups.append(_Group(GROUP_BLOCK, [item]))
            elif last and last.kind == GROUP_INLINE:
                last.lines.append(item)
            else:
                groups.append(_Group(GROUP_INLINE, [item]))
        return groups

    # ------------------------- rendering -------------------------
    def _css_classes(self, op: Op) -> List[str]:
        hook = self.options.get("custom_css_classes")
        if not hook:
            return []
        found = hook(op)
        if not found:
            return []
        if isinstance(found, str):
            return [found]
        return [c for c in found if c]

    def _render_custom(self, op: Op, context_op: Optional[Op]) -> str:
        if self._custom_renderer is None:
            return ""
        return self._custom_renderer(op, context_op) or ""

    def _render_inline(self, op: Op, line_op: Optional[Op]) -> str:
        insert = op["insert"]
        attrs = _attrs(op)
        link = attrs.get("link")

        if isinstance(insert, dict):
            if "image" in insert:
                img = _start_tag("img", [("class", "ql-image"), ("src", insert["image"])], self_closing=True)
                if link:
                    return _start_tag("a", [("href", link), ("target", self.options["link_target"])]) + img + "</a>"
                return img
            if "formula" in insert:
                return _start_tag("span", [("class", "ql-formula")]) + escape(str(insert["formula"])) + "</span>"
            return self._render_custom(op, line_op)

        classes = [f"ql-font-{attrs['font']}"] if attrs.get("font") else []
        if attrs.get("size"):
            classes.append(f"ql-size-{attrs['size']}")
        classes.extend(self._css_classes(op))
        styles = []
        if attrs.get("color"):
            styles.append(f"color:{attrs['color']}")
        if attrs.get("background"):
            styles.append(f"background-color:{attrs['background']}")

        tags: List[str] = ["a"] if link else []
        if attrs.get("script") in ("sub", "super"):
            tags.append("sub" if attrs["script"] == "sub" else "sup")
        tags.extend(tag for key, tag in _INLINE_FORMATS if attrs.get(key))
        outer: List[Tuple[str, Any]] = [("class", " ".join(classes)), ("style", ";".join(styles))]
        if not tags and (classes or styles):
            tags.append("span")

        opening = []
        for index, tag in enumerate(tags):
            tag_attrs = outer if index == 0 else []
            if tag == "a":
                tag_attrs = tag_attrs + [("href", link), ("target", self.options["link_target"])]
            opening.append(_start_tag(tag, tag_attrs))
        closing = "".join(f"</{tag}>" for tag in reversed(tags))
        return "".join(opening) + escape(insert) + closing

    def _render_line(self, line: _Line) -> str:
        return "".join(self._render_inline(op, line.newline) for op in line.ops)

    def _render_inline_group(self, group: _Group) -> str:
        tag = self.options["paragraph_tag"]
        rendered = [self._render_line(line) for line in group.lines]
        if self.options["multi_line_paragraph"]:
            return f"<{tag}>{BR.join(rendered) or BR}</{tag}>"
        return "".join(f"<{tag}>{html or BR}</{tag}>" for html in rendered)

    def _block_classes(self, newline: Op) -> List[str]:
        attrs = _attrs(newline)
        classes = []
        if attrs.get("align"):
            classes.append(f"ql-align-{attrs['align']}")
        if attrs.get("direction"):
            classes.append(f"ql-direction-{attrs['direction']}")
        if attrs.get("indent"):
            classes.append(f"ql-indent-{attrs['indent']}")
        classes.extend(self._css_classes(newline))
        return classes

    def _render_block(self, group: _Group) -> str:
        newline = group.lines[0].newline
        attrs = _attrs(newline)
        classes = " ".join(self._block_classes(newline))
        if attrs.get("code-block"):
            language = attrs["code-block"] if isinstance(attrs["code-block"], str) else None
            code = NEWLINE.join(
                "".join(escape(op["insert"]) for op in line.ops if isinstance(op["insert"], str))
                for line in group.lines
            )
            return _start_tag("pre", [("class", classes), ("data-language", language)]) + code + "</pre>"
        if attrs.get("header"):
            tag = f"h{attrs['header']}"
        elif attrs.get("blockquote"):
            tag = "blockquote"
        else:
            tag = self.options["paragraph_tag"]
        inner = BR.join(self._render_line(line) for line in group.lines) or BR
        return _start_tag(tag, [("class", classes)]) + inner + f"</{tag}>"

    @staticmethod
    def _list_tag(line: _Line) -> str:
        return "ol" if line.attributes.get("list") == "ordered" else "ul"

    def _render_list(self, group: _Group) -> str:
        tag = self._list_tag(group.lines[0])
        items = []
        for line in group.lines:
            kind = line.attributes.get("list")
            checked = {"checked": "true", "unchecked": "false"}.get(kind)
            li_attrs = [("class", " ".join(self._block_classes(line.newline))), ("data-checked", checked)]
            items.append(_start_tag("li", li_attrs) + (self._render_line(line) or BR) + "</li>")
        return f"<{tag}>" + "".join(items) + f"</{tag}>"

    def _render_group(self, group: _Group) -> str:
        if group.kind == GROUP_INLINE:
            return self._render_inline_group(group)
        if group.kind == GROUP_BLOCK:
            return self._render_block(group)
        if group.kind == GROUP_LIST:
            return self._render_list(group)
        if group.kind == GROUP_VIDEO:
            src = group.op["insert"]["video"]
            attrs = [("class", "ql-video"), ("frameborder", "0"), ("allowfullscreen", "true"), ("src", src)]
            return _start_tag("iframe", attrs) + "</iframe>"
        return self._render_custom(group.op, None)

    def convert(self) -> str:
        parts: List[str] = []
        for group in self._groups():
            html = self._render_group(group)
            if self._after_render is not None:
                html = self._after_render(group.kind, html)
            parts.append(html)
        return "".join(parts)
