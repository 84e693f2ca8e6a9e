from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PracticeFileError(Exception):
    """The practice file could not be found or read."""


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _is_typeable(char: str) -> bool:
    return char in "\n\t" or char.isprintable()


def load_practice_text(
    path: Path,
    *,
    strip_trailing_newline: bool = True,
    join_lines: bool = False,
) -> str:
    path = Path(path)
    if not path.is_file():
        raise PracticeFileError(f"The file {path.name!r} does not exist.")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise PracticeFileError(f"The file {path.name!r} is not valid UTF-8 text.") from exc
    except OSError as exc:
        raise PracticeFileError(f"Could not read {path.name!r}: {exc.strerror or exc}") from exc

    text = _normalize_newlines(text)
    typeable = "".join(char for char in text if _is_typeable(char))
    if len(typeable) != len(text):
        logger.warning("Dropped %d characters that cannot be typed from %s", len(text) - len(typeable), path)
        text = typeable
    if strip_trailing_newline and text.endswith("\n"):
        text = text[:-1]
    if join_lines:
        text = text.replace("\n", " ")
    logger.info("Loaded %d characters from %s", len(text), path)
    return text
