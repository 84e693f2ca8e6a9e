from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pygame

from typepractice.render import StyleTag

Color = Tuple[int, int, int]

_MODIFIER_MASK = pygame.KMOD_CTRL | pygame.KMOD_ALT | pygame.KMOD_META | pygame.KMOD_GUI
_ENTER_KEYS = {pygame.K_RETURN, pygame.K_KP_ENTER}


@dataclass
class SegmentStyle:
    fg: Color
    bg: Optional[Color] = None
    bold: bool = False


def _color(value: Any, fallback: Color) -> Color:
    try:
        r, g, b = (max(0, min(255, int(part))) for part in value)
    except (TypeError, ValueError):
        return fallback
    return (r, g, b)


def build_styles(styles_config: Dict[str, Any]) -> Dict[StyleTag, SegmentStyle]:
    styles: Dict[StyleTag, SegmentStyle] = {}
    for tag in StyleTag:
        entry = styles_config.get(tag.value) or {}
        bg = entry.get("bg")
        styles[tag] = SegmentStyle(
            fg=_color(entry.get("fg"), (230, 230, 230)),
            bg=_color(bg, (245, 245, 245)) if bg is not None else None,
            bold=bool(entry.get("bold", False)),
        )
    return styles


def create_window(window_config: Dict[str, Any]) -> Tuple[pygame.Surface, pygame.Rect]:
    pygame.init()
    pygame.display.set_caption(str(window_config.get("title", "Typing Practice")))
    if window_config.get("fullscreen"):
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        size = (int(window_config.get("width", 1024)), int(window_config.get("height", 640)))
        screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    pygame.key.set_repeat(400, 40)
    return screen, screen.get_rect()


def create_text_font(name: str, size: int, bold: bool = False) -> pygame.font.Font:
    for candidate in (name, "dejavusansmono", "monospace"):
        if candidate and pygame.font.match_font(candidate):
            return pygame.font.SysFont(candidate, size, bold=bold)
    return pygame.font.SysFont(None, size, bold=bold)


def is_quit_chord(event: pygame.event.Event) -> bool:
    if event.type != pygame.KEYDOWN:
        return False
    if event.key == pygame.K_ESCAPE:
        return True
    return event.key == pygame.K_c and bool(event.mod & pygame.KMOD_CTRL)


def key_to_char(event: pygame.event.Event) -> Optional[str]:
    """Translate a key press into the character it types, if any."""
    if event.type != pygame.KEYDOWN:
        return None
    if event.mod & _MODIFIER_MASK:
        return None
    if event.key in _ENTER_KEYS:
        return "\n"
    if event.key == pygame.K_TAB:
        return "\t"
    char = getattr(event, "unicode", "")
    if len(char) == 1 and char.isprintable():
        return char
    return None
