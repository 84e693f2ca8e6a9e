from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from typepractice.progress import ProgressSnapshot, TypingProgress


class StyleTag(Enum):
    TYPED = "typed"
    MISTYPED = "mistyped"
    CURRENT = "current"
    UNTYPED = "untyped"
    PLAIN = "plain"


@dataclass(frozen=True)
class Segment:
    text: str
    style: StyleTag


DisplayLine = List[Segment]


def _plain_line(text: str, style: StyleTag) -> DisplayLine:
    return [Segment(text, style)] if text else []


def _marker(buffer: str, style: StyleTag) -> List[Segment]:
    # Each line feed in the junction is drawn as its own empty, highlighted cell.
    segments: List[Segment] = []
    parts = buffer.split("\n")
    for idx, part in enumerate(parts):
        if part:
            segments.append(Segment(part, style))
        if idx < len(parts) - 1:
            segments.append(Segment("", style))
    return segments


def render_lines(progress: Union[TypingProgress, ProgressSnapshot]) -> List[DisplayLine]:
    """Split a progress state into styled display lines.

    Line feeds in the text become real line breaks. When the key in focus
    (the mistyped buffer or the current character) is itself a line feed,
    the untyped remainder is pushed onto the following line so the
    highlighted break still ends its line.
    """
    typed_lines = progress.typed.split("\n")
    untyped_lines = progress.untyped.split("\n")
    typed_tail = typed_lines.pop()
    untyped_head = untyped_lines.pop(0)

    lines: List[DisplayLine] = [_plain_line(text, StyleTag.TYPED) for text in typed_lines]

    junction = (
        _plain_line(typed_tail, StyleTag.TYPED)
        + _marker(progress.mistyped, StyleTag.MISTYPED)
        + _marker(progress.current, StyleTag.CURRENT)
    )
    head = _plain_line(untyped_head, StyleTag.UNTYPED)
    if progress.mistyped == "\n" or progress.current == "\n":
        lines.append(junction)
        lines.append(head)
    else:
        lines.append(junction + head)

    lines.extend(_plain_line(text, StyleTag.UNTYPED) for text in untyped_lines)
    return lines
