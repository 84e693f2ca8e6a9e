from __future__ import annotations

from dataclasses import dataclass
from typing import List


class EmptyInputError(ValueError):
    """Raised when a practice session is started from an empty text."""


@dataclass(frozen=True)
class ProgressSnapshot:
    typed: str
    mistyped: str
    current: str
    untyped: str


class TypingProgress:
    """Tracks how far the user has got through a reference text.

    The reference is split into a confirmed ``typed`` prefix, the single
    ``current`` character expected next and the ``untyped`` remainder.
    Wrong keystrokes pile up in ``mistyped`` until the expected key is
    pressed.
    """

    def __init__(self, reference: str) -> None:
        if not reference:
            raise EmptyInputError("There is nothing to practice: the text is empty.")
        self._reference = reference
        self._position = 0
        self._mistyped: List[str] = []

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def typed(self) -> str:
        return self._reference[: self._position]

    @property
    def mistyped(self) -> str:
        return "".join(self._mistyped)

    @property
    def current(self) -> str:
        return self._reference[self._position : self._position + 1]

    @property
    def untyped(self) -> str:
        return self._reference[self._position + 1 :]

    def advance(self, key: str) -> None:
        if self.is_complete():
            return
        if key == self.current:
            self._position += 1
            self._mistyped = []
            return
        self._mistyped.append(key)

    def is_complete(self) -> bool:
        return self._position >= len(self._reference)

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            typed=self.typed,
            mistyped=self.mistyped,
            current=self.current,
            untyped=self.untyped,
        )
