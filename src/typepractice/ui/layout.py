from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from typepractice.render import DisplayLine, Segment, StyleTag

Measure = Callable[[str], int]


@dataclass
class _Cell:
    char: str
    style: StyleTag


@dataclass
class _Token:
    start: int
    end: int
    widths: List[int]
    is_space: bool


def _wrap_tokens(tokens: List[_Token], max_width: int) -> List[Tuple[int, int]]:
    if max_width <= 0:
        return []
    lines: List[Tuple[int, int]] = []
    line_start: Optional[int] = None
    line_end: Optional[int] = None
    line_width = 0
    for token in tokens:
        token_width = sum(token.widths)
        if token_width <= max_width:
            if line_width == 0:
                line_start = token.start
                line_end = token.end
                line_width = token_width
            elif line_width + token_width <= max_width:
                line_end = token.end
                line_width += token_width
            else:
                if line_start is not None and line_end is not None:
                    lines.append((line_start, line_end))
                line_start = token.start
                line_end = token.end
                line_width = token_width
            continue

        # A single word wider than the row is broken wherever it overflows.
        if line_width > 0:
            if line_start is not None and line_end is not None:
                lines.append((line_start, line_end))
            line_start = None
            line_end = None
            line_width = 0

        i = 0
        widths = token.widths
        while i < len(widths):
            acc = 0
            j = i
            while j < len(widths) and (acc + widths[j] <= max_width or acc == 0):
                acc += widths[j]
                j += 1
            lines.append((token.start + i, token.start + j))
            i = j

    if line_width > 0 and line_start is not None and line_end is not None:
        lines.append((line_start, line_end))
    return lines


def _cells(line: DisplayLine) -> List[_Cell]:
    cells: List[_Cell] = []
    for segment in line:
        if not segment.text:
            cells.append(_Cell(char="", style=segment.style))
            continue
        cells.extend(_Cell(char=char, style=segment.style) for char in segment.text)
    return cells


def _tokenize(cells: List[_Cell], widths: List[int]) -> List[_Token]:
    if not cells:
        return []
    tokens: List[_Token] = []
    start = 0
    current_space = cells[0].char.isspace()
    for idx, cell in enumerate(cells):
        is_space = cell.char.isspace()
        if is_space != current_space:
            tokens.append(_Token(start=start, end=idx, widths=widths[start:idx], is_space=current_space))
            start = idx
            current_space = is_space
    tokens.append(_Token(start=start, end=len(cells), widths=widths[start:], is_space=current_space))
    return tokens


def _segments(cells: List[_Cell]) -> DisplayLine:
    segments: DisplayLine = []
    for cell in cells:
        previous = segments[-1] if segments else None
        if cell.char and previous is not None and previous.text and previous.style == cell.style:
            segments[-1] = Segment(previous.text + cell.char, cell.style)
        else:
            segments.append(Segment(cell.char, cell.style))
    return segments


def wrap_line(line: DisplayLine, max_width: int, measure: Measure) -> List[DisplayLine]:
    """Break one display line into rows no wider than ``max_width``.

    Words move to the next row as a whole unless they are wider than a row
    on their own. Empty segments mark a highlighted line break and take up
    the width of a space.
    """
    cells = _cells(line)
    if not cells:
        return [[]]
    widths = [measure(cell.char or " ") for cell in cells]
    ranges = _wrap_tokens(_tokenize(cells, widths), max(1, max_width))
    return [_segments(cells[start:end]) for start, end in ranges]


def wrap_lines(lines: List[DisplayLine], max_width: int, measure: Measure) -> List[DisplayLine]:
    rows: List[DisplayLine] = []
    for line in lines:
        rows.extend(wrap_line(line, max_width, measure))
    return rows


def focus_row(rows: List[DisplayLine]) -> int:
    mistyped_row: Optional[int] = None
    for idx, row in enumerate(rows):
        for segment in row:
            if segment.style is StyleTag.CURRENT:
                return idx
            if segment.style is StyleTag.MISTYPED:
                mistyped_row = idx
    if mistyped_row is not None:
        return mistyped_row
    return max(0, len(rows) - 1)


def scroll_offset(focus: int, visible_rows: int, total_rows: int, previous: int = 0) -> int:
    visible_rows = max(1, visible_rows)
    max_offset = max(0, total_rows - visible_rows)
    offset = previous
    if focus < offset:
        offset = focus
    elif focus >= offset + visible_rows:
        offset = focus - visible_rows + 1
    return max(0, min(max_offset, offset))
