"""Minimal retained scene graph that the graph view mounts into.

Elements carry SVG-style attributes, CSS classes, inline style, an optional
bound datum (node or edge index) and event handlers. ``to_markup`` serializes
a subtree so a rendered view can be exported as static SVG.
"""

from __future__ import annotations

import html as html_mod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

EventHandler = Callable[[int], None]


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}".rstrip("0").rstrip(".")
    return str(value)


@dataclass
class SceneElement:
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    classes: set[str] = field(default_factory=set)
    style: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    datum: int | None = None
    children: list[SceneElement] = field(default_factory=list)
    handlers: dict[str, EventHandler] = field(default_factory=dict)

    def append(self, tag: str, datum: int | None = None, **attrs: Any) -> SceneElement:
        child = SceneElement(tag=tag, attrs=dict(attrs), datum=datum)
        self.children.append(child)
        return child

    def classed(self, name: str, enabled: bool = True) -> SceneElement:
        if enabled:
            self.classes.add(name)
        else:
            self.classes.discard(name)
        return self

    def on(self, event: str, handler: EventHandler) -> SceneElement:
        self.handlers[event] = handler
        return self

    def dispatch(self, event: str) -> bool:
        """Fire ``event`` on this element; False when nothing is listening."""
        handler = self.handlers.get(event)
        if handler is None or self.datum is None:
            return False
        handler(self.datum)
        return True

    def iter(self) -> Iterator[SceneElement]:
        yield self
        for child in self.children:
            yield from child.iter()

    def select_all(self, tag: str | None = None, cls: str | None = None) -> list[SceneElement]:
        return [
            el
            for el in self.iter()
            if el is not self
            and (tag is None or el.tag == tag)
            and (cls is None or cls in el.classes)
        ]

    def remove_where(self, predicate: Callable[[SceneElement], bool]) -> None:
        self.children = [c for c in self.children if not predicate(c)]
        for child in self.children:
            child.remove_where(predicate)

    def to_markup(self) -> str:
        parts = [self.tag]
        if self.classes:
            parts.append(f'class="{html_mod.escape(" ".join(sorted(self.classes)))}"')
        for key, value in self.attrs.items():
            if value is None:
                continue
            parts.append(f'{key}="{html_mod.escape(_format_value(value), quote=True)}"')
        if self.datum is not None:
            parts.append(f'data-index="{self.datum}"')
        if self.style:
            css = ";".join(f"{k}:{v}" for k, v in self.style.items())
            parts.append(f'style="{html_mod.escape(css, quote=True)}"')
        inner = html_mod.escape(self.text) if self.text else ""
        inner += "".join(child.to_markup() for child in self.children)
        return f"<{' '.join(parts)}>{inner}</{self.tag}>"


class Container(SceneElement):
    """Mount point for one or more rendered graph subtrees."""

    def __init__(self) -> None:
        super().__init__(tag="div")

    def clear(self) -> None:
        self.children = []
