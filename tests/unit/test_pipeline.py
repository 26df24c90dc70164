"""Unit tests for the split pipeline, using a fake codec."""

import json
import re
from pathlib import Path
from unittest.mock import Mock

import pytest

from fontslicer.config import ChunkingConfig, OutputConfig, SplitSettings
from fontslicer.core import FontSplitter, PriorityList
from fontslicer.domain import Glyph
from fontslicer.exceptions import (
    DecodeError,
    EncodeError,
    EstimationError,
    PersistenceError,
    PriorityError,
)

from conftest import CJK_START, FakeCodec, make_glyphs

ALL_STAGES = [
    "decode",
    "rank",
    "estimate",
    "partition",
    "serialize",
    "name",
    "persist",
    "stylesheet",
    "preview",
    "report",
]


@pytest.fixture
def source_font(tmp_path: Path) -> Path:
    """A 500000 byte stand-in for a source font."""
    path = tmp_path / "source.ttf"
    path.write_bytes(b"\0" * 500_000)
    return path


def _settings(font_path: Path, dest_dir: Path, **output) -> SplitSettings:
    return SplitSettings(
        font_path=font_path,
        chunking=ChunkingConfig(chunk_size=100_000),
        output=OutputConfig(dest_dir=dest_dir, **output),
    )


class TestFontSplitter:
    """Tests for FontSplitter orchestration."""

    def test_split_scenario(self, source_font: Path, tmp_path: Path):
        """Test 999 glyphs at a 100000 byte budget give six chunks."""
        dest = tmp_path / "out"
        result = FontSplitter(_settings(source_font, dest), codec=FakeCodec()).split()

        assert result.estimate.chunk_length == 180
        assert len(result.artifacts) == 6
        assert [len(artifact.unicodes) for artifact in result.artifacts] == [180] * 5 + [99]

        for artifact, path in zip(result.artifacts, result.chunk_paths):
            assert path == dest / artifact.filename
            assert path.stat().st_size == artifact.size

    def test_every_code_point_covered_once(self, source_font: Path, tmp_path: Path):
        """Test chunks cover each code point of the font exactly once."""
        result = FontSplitter(_settings(source_font, tmp_path / "out"), codec=FakeCodec()).split()

        covered = [code_point for artifact in result.artifacts for code_point in artifact.unicodes]
        assert sorted(covered) == list(range(CJK_START, CJK_START + 999))

    def test_outputs_written(self, source_font: Path, tmp_path: Path):
        """Test the stylesheet, preview page and report exist."""
        dest = tmp_path / "out"
        result = FontSplitter(_settings(source_font, dest), codec=FakeCodec()).split()

        assert result.stylesheet_path == dest / "result.css"
        assert result.preview_path == dest / "index.html"
        assert result.report_path == dest / "reporter.json"

        css = result.stylesheet_path.read_text(encoding="utf-8")
        assert len(re.findall(r"@font-face \{", css)) == 6
        assert 'font-family: "Test Sans";' in css
        assert "font-weight: 400;" in css

        report = json.loads(result.report_path.read_text(encoding="utf-8"))
        assert [item["name"] for item in report["data"]] == [a.name for a in result.artifacts]

    def test_optional_outputs_disabled(self, source_font: Path, tmp_path: Path):
        """Test preview and report can be turned off."""
        dest = tmp_path / "out"
        settings = _settings(
            source_font, dest, test_html=False, reporter=False, css_file_name="fonts"
        )
        result = FontSplitter(settings, codec=FakeCodec()).split()

        assert result.preview_path is None
        assert result.report_path is None
        assert result.stylesheet_path.name == "fonts.css"
        assert not (dest / "index.html").exists()
        assert not (dest / "reporter.json").exists()
        assert "preview" not in result.timings

    def test_stage_timings_in_order(self, source_font: Path, tmp_path: Path):
        """Test every stage is timed, in execution order."""
        result = FontSplitter(_settings(source_font, tmp_path / "out"), codec=FakeCodec()).split()

        assert list(result.timings) == ALL_STAGES
        assert all(duration >= 0 for duration in result.timings.values())
        assert result.stats.chunk_count == 6
        assert result.total_bytes == sum(artifact.size for artifact in result.artifacts)

    def test_split_is_deterministic(self, source_font: Path, tmp_path: Path):
        """Test two runs give the same names and stylesheet."""
        first = FontSplitter(_settings(source_font, tmp_path / "a"), codec=FakeCodec()).split()
        second = FontSplitter(_settings(source_font, tmp_path / "b"), codec=FakeCodec()).split()

        assert [a.name for a in first.artifacts] == [a.name for a in second.artifacts]
        assert first.stylesheet_path.read_text(encoding="utf-8") == second.stylesheet_path.read_text(
            encoding="utf-8"
        )

    def test_priority_file(self, source_font: Path, tmp_path: Path):
        """Test a configured priority file decides the first chunk."""
        priority_file = tmp_path / "priority.txt"
        last = chr(CJK_START + 998)
        priority_file.write_text(last, encoding="utf-8")
        settings = SplitSettings(
            font_path=source_font,
            chunking=ChunkingConfig(chunk_size=100_000, priority_file=priority_file),
            output=OutputConfig(dest_dir=tmp_path / "out"),
        )

        result = FontSplitter(settings, codec=FakeCodec()).split()

        assert result.artifacts[0].unicodes[0] == CJK_START + 998

    def test_injected_priority(self, source_font: Path, tmp_path: Path):
        """Test an empty priority keeps source order."""
        result = FontSplitter(
            _settings(source_font, tmp_path / "out"),
            codec=FakeCodec(),
            priority=PriorityList(),
        ).split()

        assert result.artifacts[0].unicodes[:3] == (CJK_START, CJK_START + 1, CJK_START + 2)

    def test_chunk_without_code_points(self, tmp_path: Path):
        """Test a chunk of unmapped glyphs is written but gets no rule."""
        font = tmp_path / "small.ttf"
        font.write_bytes(b"\0" * 100)
        glyphs = make_glyphs(10) + [Glyph(gid=gid, name=f"alt{gid}") for gid in range(11, 16)]
        codec = FakeCodec(glyphs, overhead=0, per_glyph=200)
        logger = Mock()
        settings = SplitSettings(
            font_path=font,
            chunking=ChunkingConfig(chunk_size=1024),
            output=OutputConfig(dest_dir=tmp_path / "out"),
        )

        result = FontSplitter(settings, codec=codec, priority=PriorityList(), logger=logger).split()

        assert result.estimate.chunk_length == 5
        assert len(result.chunk_paths) == 3
        assert result.artifacts[2].unicodes == ()
        css = result.stylesheet_path.read_text(encoding="utf-8")
        assert len(re.findall(r"@font-face \{", css)) == 2
        assert result.artifacts[2].name not in css
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "Chunk has no stylesheet rule"


class TestFontSplitterErrors:
    """Tests for stage-tagged failures."""

    def test_decode_failure(self, tmp_path: Path):
        """Test a missing source fails in the decode stage."""
        settings = _settings(tmp_path / "missing.ttf", tmp_path / "out")
        with pytest.raises(DecodeError) as exc_info:
            FontSplitter(settings, codec=FakeCodec()).split()
        assert exc_info.value.stage == "decode"
        assert not (tmp_path / "out").exists()

    def test_estimate_failure(self, source_font: Path, tmp_path: Path):
        """Test a font with only the void glyph fails in the estimate stage."""
        codec = FakeCodec(make_glyphs(0))
        with pytest.raises(EstimationError) as exc_info:
            FontSplitter(_settings(source_font, tmp_path / "out"), codec=codec).split()
        assert exc_info.value.stage == "estimate"

    def test_serialize_failure(self, source_font: Path, tmp_path: Path):
        """Test an encode failure aborts before anything is written."""
        codec = FakeCodec(fail_on_call=3)
        dest = tmp_path / "out"
        with pytest.raises(EncodeError) as exc_info:
            FontSplitter(_settings(source_font, dest), codec=codec).split()

        assert exc_info.value.stage == "serialize"
        assert len(codec.encode_calls) == 3
        assert not dest.exists()

    def test_persist_failure(self, source_font: Path, tmp_path: Path):
        """Test an unusable destination fails in the persist stage."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(PersistenceError) as exc_info:
            FontSplitter(_settings(source_font, blocker), codec=FakeCodec()).split()
        assert exc_info.value.stage == "persist"

    def test_failure_is_logged(self, tmp_path: Path):
        """Test failures are logged with their stage."""
        logger = Mock()
        settings = _settings(tmp_path / "missing.ttf", tmp_path / "out")
        with pytest.raises(DecodeError):
            FontSplitter(settings, codec=FakeCodec(), logger=logger).split()

        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["stage"] == "decode"
        assert logger.error.call_args.kwargs["error_type"] == "DecodeError"


class TestPriorityFileErrors:
    """Tests for priority files rejected before the font is decoded."""

    def _settings(self, source_font: Path, tmp_path: Path, priority_file: Path) -> SplitSettings:
        return SplitSettings(
            font_path=source_font,
            chunking=ChunkingConfig(chunk_size=100_000, priority_file=priority_file),
            output=OutputConfig(dest_dir=tmp_path / "out"),
        )

    def test_missing_priority_file(self, source_font: Path, tmp_path: Path):
        """Test a missing file fails at construction, before decode."""
        codec = Mock()
        settings = self._settings(source_font, tmp_path, tmp_path / "missing.json")

        with pytest.raises(PriorityError) as exc_info:
            FontSplitter(settings, codec=codec)

        assert exc_info.value.stage == "config"
        codec.decode.assert_not_called()
        assert not (tmp_path / "out").exists()

    def test_malformed_json_priority_file(self, source_font: Path, tmp_path: Path):
        """Test truncated JSON fails with PriorityError and is logged."""
        priority_file = tmp_path / "priority.json"
        priority_file.write_text("[1, 2", encoding="utf-8")
        logger = Mock()

        with pytest.raises(PriorityError) as exc_info:
            FontSplitter(
                self._settings(source_font, tmp_path, priority_file),
                codec=FakeCodec(),
                logger=logger,
            )

        assert exc_info.value.path == str(priority_file)
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["path"] == str(priority_file)

    def test_injected_priority_skips_file(self, source_font: Path, tmp_path: Path):
        """Test an injected priority list wins over the configured file."""
        settings = self._settings(source_font, tmp_path, tmp_path / "missing.json")
        splitter = FontSplitter(settings, codec=FakeCodec(), priority=PriorityList())
        assert len(splitter.priority) == 0
