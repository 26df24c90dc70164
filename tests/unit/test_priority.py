"""Unit tests for priority lists and glyph ranking."""

import json
from pathlib import Path

import pytest

from fontslicer.charset import ASCII_PRINTABLE, DEFAULT_PRIORITY
from fontslicer.core import PriorityList, glyph_rank, rank_glyphs
from fontslicer.domain import Glyph
from fontslicer.exceptions import PriorityError


def _glyph(gid: int, text: str = "") -> Glyph:
    return Glyph(gid=gid, name=f"g{gid}", unicodes=tuple(ord(char) for char in text))


class TestPriorityList:
    """Tests for PriorityList class."""

    def test_rank_follows_order(self):
        """Test ranks are positions in the list."""
        priority = PriorityList.from_text("的一是")
        assert priority.rank(ord("的")) == 0
        assert priority.rank(ord("是")) == 2
        assert priority.rank(ord("A")) is None

    def test_first_occurrence_wins(self):
        """Test repeated code points keep their first rank."""
        priority = PriorityList.from_text("abca")
        assert priority.rank(ord("a")) == 0
        assert priority.rank(ord("c")) == 2
        assert len(priority) == 3
        assert list(priority) == [ord("a"), ord("b"), ord("c")]

    def test_contains(self):
        """Test membership checks."""
        priority = PriorityList([0x41])
        assert 0x41 in priority
        assert 0x42 not in priority

    def test_empty_list_is_falsy(self):
        """Test an empty list has no entries."""
        assert not PriorityList()

    def test_default_starts_with_ascii(self):
        """Test the built-in list ranks printable ASCII first."""
        priority = PriorityList.default()
        assert priority.rank(0x20) == 0
        assert priority.rank(ord("~")) == len(ASCII_PRINTABLE) - 1
        assert ord("的") in priority
        assert len(priority) <= len(DEFAULT_PRIORITY)

    def test_load_text_file(self, tmp_path: Path):
        """Test plain text files ignore line breaks."""
        path = tmp_path / "chars.txt"
        path.write_text("一二\r\n三\n", encoding="utf-8")
        priority = PriorityList.load(path)
        assert list(priority) == [ord("一"), ord("二"), ord("三")]

    def test_load_json_file(self, tmp_path: Path):
        """Test JSON arrays mix code points and strings, nested or not."""
        path = tmp_path / "chars.json"
        path.write_text(json.dumps([65, ["BC", [68]], "一"]), encoding="utf-8")
        priority = PriorityList.load(path)
        assert list(priority) == [65, 66, 67, 68, ord("一")]

    def test_load_json_rejects_objects(self, tmp_path: Path):
        """Test unexpected JSON structures raise PriorityError."""
        path = tmp_path / "chars.json"
        path.write_text(json.dumps({"chars": "abc"}), encoding="utf-8")
        with pytest.raises(PriorityError, match="Invalid priority entry") as exc_info:
            PriorityList.load(path)
        assert exc_info.value.path == str(path)
        assert exc_info.value.stage == "config"

    def test_load_missing_file(self, tmp_path: Path):
        """Test missing files raise PriorityError."""
        with pytest.raises(PriorityError, match="missing.txt"):
            PriorityList.load(tmp_path / "missing.txt")

    def test_load_malformed_json(self, tmp_path: Path):
        """Test truncated JSON raises PriorityError, not a bare ValueError."""
        path = tmp_path / "chars.json"
        path.write_text("[65, 66", encoding="utf-8")
        with pytest.raises(PriorityError) as exc_info:
            PriorityList.load(path)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_load_rejects_non_utf8(self, tmp_path: Path):
        """Test files that are not UTF-8 raise PriorityError."""
        path = tmp_path / "chars.txt"
        path.write_bytes(b"\xff\xfe\x00A")
        with pytest.raises(PriorityError):
            PriorityList.load(path)


class TestRankGlyphs:
    """Tests for glyph ranking."""

    def test_glyph_rank_uses_first_code_point(self):
        """Test only the first code point decides the rank."""
        priority = PriorityList.from_text("BA")
        glyph = Glyph(gid=1, name="AB", unicodes=(ord("A"), ord("B")))
        assert glyph_rank(glyph, priority) == 1
        assert glyph_rank(_glyph(2), priority) is None

    def test_ranked_before_unranked(self):
        """Test listed glyphs come first in list order."""
        glyphs = [_glyph(1, "x"), _glyph(2, "b"), _glyph(3), _glyph(4, "a")]
        ranked = rank_glyphs(glyphs, PriorityList.from_text("ab"))
        assert [glyph.gid for glyph in ranked] == [4, 2, 1, 3]

    def test_unranked_keep_source_order(self):
        """Test glyphs outside the list keep their relative order."""
        glyphs = [_glyph(gid, chr(0x4E00 + gid)) for gid in range(1, 20)]
        ranked = rank_glyphs(glyphs, PriorityList.from_text(chr(0x4E00 + 10)))
        assert ranked[0].gid == 10
        assert [glyph.gid for glyph in ranked[1:]] == [gid for gid in range(1, 20) if gid != 10]

    def test_equal_ranks_are_stable(self):
        """Test glyphs sharing a first code point never swap."""
        glyphs = [_glyph(1, "z"), _glyph(2, "a"), _glyph(3, "a"), _glyph(4, "a")]
        ranked = rank_glyphs(glyphs, PriorityList.from_text("a"))
        assert [glyph.gid for glyph in ranked] == [2, 3, 4, 1]

    def test_empty_priority_is_noop(self):
        """Test an empty list leaves the order unchanged."""
        glyphs = [_glyph(3, "c"), _glyph(1, "a"), _glyph(2, "b")]
        ranked = rank_glyphs(glyphs, PriorityList())
        assert ranked == glyphs
        assert ranked is not glyphs

    def test_ranking_is_permutation(self):
        """Test ranking neither drops nor duplicates glyphs."""
        glyphs = [_glyph(gid, chr(0x41 + gid % 30)) for gid in range(1, 100)]
        ranked = rank_glyphs(glyphs, PriorityList.default())
        assert sorted(glyph.gid for glyph in ranked) == list(range(1, 100))
