"""Glyph priority ranking."""

from collections.abc import Sequence

from fontslicer.core.priority import PriorityList
from fontslicer.domain import Glyph


def glyph_rank(glyph: Glyph, priority: PriorityList) -> int | None:
    """Rank of a glyph: the priority of its first code point, if listed."""
    first = glyph.first_unicode
    if first is None:
        return None
    return priority.rank(first)


def rank_glyphs(glyphs: Sequence[Glyph], priority: PriorityList) -> list[Glyph]:
    """Order glyphs by priority.

    Ranked glyphs come first in ascending rank; unranked glyphs (no code
    point, or first code point not in the list) follow in their original
    order. The sort is stable, so equal ranks never swap.

    Args:
        glyphs: Glyphs to order, void glyph excluded
        priority: Preference order over code points

    Returns:
        New list of the same glyphs
    """
    if not priority:
        return list(glyphs)

    def sort_key(glyph: Glyph) -> tuple[int, int]:
        rank = glyph_rank(glyph, priority)
        if rank is None:
            return (1, 0)
        return (0, rank)

    return sorted(glyphs, key=sort_key)
