"""Unit tests for directory mapping."""

from pathlib import Path

import pytest

from svgraster.core.batch.discovery import build_directory_mapping
from svgraster.core.exceptions import ContentReadError


class TestBuildDirectoryMapping:
    """Test source discovery in a directory."""

    def test_maps_svg_files_case_insensitively(self, svg_dir, tmp_path):
        out = tmp_path / "out"

        mapping = build_directory_mapping(svg_dir, out)

        assert mapping == {
            str(svg_dir / "a.svg"): str(out / "a.png"),
            str(svg_dir / "b.svg"): str(out / "b.png"),
            str(svg_dir / "c.SVG"): str(out / "c.png"),
            str(svg_dir / "d.svg"): str(out / "d.png"),
        }

    def test_skips_directories_and_other_files(self, tmp_path):
        source = tmp_path / "src"
        (source / "nested.svg").mkdir(parents=True)
        (source / "image.svg.bak").write_text("x")
        (source / "logo.min.svg").write_text("<svg/>")

        mapping = build_directory_mapping(source, tmp_path / "out")

        assert list(mapping) == [str(source / "logo.min.svg")]
        assert Path(mapping[str(source / "logo.min.svg")]).name == "logo.min.png"

    def test_custom_extensions(self, svg_dir, tmp_path):
        mapping = build_directory_mapping(
            svg_dir, tmp_path, source_extension=".txt", output_extension=".webp"
        )
        assert mapping == {str(svg_dir / "notes.txt"): str(tmp_path / "notes.webp")}

    def test_empty_directory(self, tmp_path):
        assert build_directory_mapping(tmp_path, tmp_path / "out") == {}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ContentReadError, match="Cannot list"):
            build_directory_mapping(tmp_path / "missing", tmp_path / "out")
