"""Character priority lists.

A priority list is a total preference order over code points. Glyphs whose
first code point appears earlier in the list are placed in earlier chunks.
"""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from fontslicer.charset import DEFAULT_PRIORITY
from fontslicer.exceptions import PriorityError


def _flatten(value: Any) -> Iterator[int]:
    """Yield code points from nested lists of ints and strings."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid priority entry: {value!r}")
    if isinstance(value, int):
        yield value
    elif isinstance(value, str):
        yield from (ord(char) for char in value)
    elif isinstance(value, list):
        for item in value:
            yield from _flatten(item)
    else:
        raise ValueError(f"Invalid priority entry: {value!r}")


class PriorityList:
    """Ordered code points with constant-time rank lookup.

    Example:
        priority = PriorityList.from_text("的一是")
        priority.rank(ord("一"))  # 1
        priority.rank(ord("A"))   # None
    """

    def __init__(self, code_points: Iterable[int] = ()) -> None:
        """Build the list; repeated code points keep their first position.

        Args:
            code_points: Code points in preference order
        """
        ranks: dict[int, int] = {}
        for code_point in code_points:
            if code_point not in ranks:
                ranks[code_point] = len(ranks)
        self._ranks = ranks

    @classmethod
    def from_text(cls, text: str) -> "PriorityList":
        """Build a list from the characters of ``text``."""
        return cls(ord(char) for char in text)

    @classmethod
    def default(cls) -> "PriorityList":
        """Get the built-in list (ASCII, punctuation, common Chinese)."""
        return cls.from_text(DEFAULT_PRIORITY)

    @classmethod
    def load(cls, path: Path) -> "PriorityList":
        """Load a list from a file.

        ``.json`` files hold a (possibly nested) array of code points or
        strings; any other file is read as plain UTF-8 text, one entry per
        character, line breaks ignored.

        Raises:
            PriorityError: If the file cannot be read, is not UTF-8, or a
                JSON file is malformed or has an unexpected structure
        """
        try:
            text = path.read_text(encoding="utf-8")
            if path.suffix.lower() == ".json":
                return cls(_flatten(json.loads(text)))
        except (OSError, ValueError) as e:
            raise PriorityError(str(path), str(e)) from e
        return cls.from_text(text.replace("\r", "").replace("\n", ""))

    def rank(self, code_point: int) -> int | None:
        """Position of ``code_point`` in the list, or None if absent."""
        return self._ranks.get(code_point)

    def __contains__(self, code_point: object) -> bool:
        return code_point in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ranks)
