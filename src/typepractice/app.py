from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pygame

from typepractice.config import load_config
from typepractice.loader import PracticeFileError, load_practice_text
from typepractice.paths import ensure_directories, get_data_root
from typepractice.progress import EmptyInputError, TypingProgress
from typepractice.render import DisplayLine, Segment, StyleTag, render_lines
from typepractice.ui.common import (
    build_styles,
    create_text_font,
    create_window,
    is_quit_chord,
    key_to_char,
)
from typepractice.ui.layout import focus_row, scroll_offset, wrap_lines

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typepractice",
        description="Practice typing the contents of a text file.",
    )
    parser.add_argument("path", type=Path, help="text file to practice with")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--fullscreen", action="store_true", help="open a fullscreen window")
    return parser.parse_args(argv)


def setup_logging(config: Dict[str, Any], log_dir: Path) -> None:
    settings = config.get("logging", {})
    level = getattr(logging, str(settings.get("level", "INFO")).upper(), logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.get("file", True):
        handlers.append(logging.FileHandler(log_dir / "typepractice.log", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


class PracticeApp:
    def __init__(self, progress: TypingProgress, config: Dict[str, Any]) -> None:
        self.progress = progress
        self.config = config
        self.window_config = config["window"]
        self.screen, self.screen_rect = create_window(self.window_config)
        self.clock = pygame.time.Clock()

        font_config = config["font"]
        self.font = create_text_font(font_config["name"], int(font_config["size"]))
        self.bold_font = create_text_font(font_config["name"], int(font_config["size"]), bold=True)
        self.line_gap = int(font_config.get("line_gap", 6))
        self.tab = " " * int(font_config.get("tab_width", 4))
        self.margin = int(config.get("margin", 40))
        self.background = tuple(config.get("background", (24, 24, 28)))
        self.styles = build_styles(config.get("styles", {}))
        self.title = str(self.window_config.get("title", "Typing Practice"))
        self.scroll_row = 0

    def _visible(self, text: str) -> str:
        return text.replace("\t", self.tab)

    def _measure(self, text: str) -> int:
        return self.font.size(self._visible(text))[0]

    def _line_step(self) -> int:
        return self.font.get_height() + self.line_gap

    def _text_top(self) -> int:
        return self.margin + self._line_step() * 2

    def _visible_rows(self) -> int:
        return max(1, (self.screen_rect.height - self._text_top() - self.margin) // self._line_step())

    def _draw_segments(self, row: DisplayLine, x: int, y: int) -> None:
        for segment in row:
            style = self.styles[segment.style]
            font = self.bold_font if style.bold else self.font
            if not segment.text:
                # Highlighted line break: one blank cell in the segment's colours.
                width = font.size(" ")[0]
                pygame.draw.rect(self.screen, style.bg or style.fg, (x, y, width, font.get_height()))
                x += width
                continue
            text = self._visible(segment.text)
            if style.bg is not None:
                surface = font.render(text, True, style.fg, style.bg)
            else:
                surface = font.render(text, True, style.fg)
            self.screen.blit(surface, (x, y))
            x += surface.get_width()

    def _render(self) -> None:
        self.screen.fill(self.background)

        title_row = [Segment(self.title, StyleTag.PLAIN)]
        title_x = self.screen_rect.centerx - self._measure(self.title) // 2
        self._draw_segments(title_row, title_x, self.margin)
        pygame.draw.line(
            self.screen,
            self.styles[StyleTag.PLAIN].fg,
            (self.margin, self.margin + self._line_step() + self.line_gap),
            (self.screen_rect.width - self.margin, self.margin + self._line_step() + self.line_gap),
        )

        max_width = max(1, self.screen_rect.width - self.margin * 2)
        rows = wrap_lines(render_lines(self.progress), max_width, self._measure)
        visible_rows = self._visible_rows()
        self.scroll_row = scroll_offset(focus_row(rows), visible_rows, len(rows), self.scroll_row)

        y = self._text_top()
        for row in rows[self.scroll_row : self.scroll_row + visible_rows]:
            self._draw_segments(row, self.margin, y)
            y += self._line_step()

        pygame.display.flip()

    def run(self) -> bool:
        """Run the session until it is finished or the user quits.

        Returns True when the whole text was typed.
        """
        fps = int(self.window_config.get("fps", 60))
        running = True
        logger.info("Session started with %d characters", len(self.progress.reference))
        self._render()
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or is_quit_chord(event):
                    logger.info("Session quit with %d characters typed", len(self.progress.typed))
                    running = False
                    break
                if event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.get_surface()
                    self.screen_rect = self.screen.get_rect()
                    continue
                char = key_to_char(event)
                if char is None:
                    continue
                self.progress.advance(char)
                if self.progress.is_complete():
                    logger.info("Session complete")
                    running = False
                    break

            self._render()
            self.clock.tick(fps)
        return self.progress.is_complete()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    if args.fullscreen:
        config["window"] = dict(config["window"], fullscreen=True)
    dirs = ensure_directories(get_data_root(config))
    setup_logging(config, dirs["logs"])

    practice = config.get("practice", {})
    try:
        text = load_practice_text(
            args.path,
            strip_trailing_newline=bool(practice.get("strip_trailing_newline", True)),
            join_lines=bool(practice.get("join_lines", False)),
        )
        progress = TypingProgress(text)
    except (PracticeFileError, EmptyInputError) as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        completed = PracticeApp(progress, config).run()
    except pygame.error:
        logger.exception("Display failure")
        return 1
    finally:
        pygame.quit()

    if completed:
        print(f"Practice complete: {len(progress.reference)} characters typed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
