"""
Unit tests for the snapshot extraction CLI (cli/extract.py).
"""

import json
from pathlib import Path

import pytest

from mhtml_snapshot.cli.extract import build_manifest, main, write_parts
from mhtml_snapshot.models.snapshot_part import DecodedPart, Snapshot
from tests.fixtures.snapshots import PNG_SIGNATURE, SAMPLE_SNAPSHOTS


class TestMain:
    """Tests for the CLI entry point."""

    @pytest.mark.unit
    def test_manifest_to_stdout(self, tmp_snapshot_file, capsys):
        assert main([tmp_snapshot_file]) == 0

        lines = capsys.readouterr().out.splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["location"] for r in records] == [
            "https://example.com/",
            "https://example.com/logo.png",
        ]
        assert records[0]["root"] is True
        assert records[1]["size_bytes"] == len(PNG_SIGNATURE)
        assert "path" not in records[0]

    @pytest.mark.unit
    def test_writes_parts_and_json_manifest(self, tmp_snapshot_file, tmp_path):
        out_dir = tmp_path / "parts"
        manifest = tmp_path / "manifest.json"

        code = main([tmp_snapshot_file, "--output-dir", str(out_dir), "--output", str(manifest), "--format", "json"])

        assert code == 0
        records = json.loads(manifest.read_text(encoding="utf-8"))
        assert len(records) == 2
        assert (out_dir / "logo.png").read_bytes() == PNG_SIGNATURE
        assert Path(records[0]["path"]).read_bytes().startswith(b"<html>")

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.mhtml")]) == 1

    @pytest.mark.unit
    def test_malformed_snapshot(self, tmp_path, capsys):
        path = tmp_path / "broken.mhtml"
        path.write_bytes(SAMPLE_SNAPSHOTS["no_boundary"])

        assert main([str(path)]) == 1
        assert "Error:" in capsys.readouterr().err


class TestWriteParts:
    """Tests for write_parts()."""

    @pytest.mark.unit
    def test_name_clash_gets_suffix(self, tmp_path):
        snapshot = Snapshot(
            boundary="B",
            parts=[
                DecodedPart(content_type="image/png", location="http://a/x.png", data=b"1"),
                DecodedPart(content_type="image/png", location="http://b/x.png", data=b"2"),
            ],
        )

        paths = write_parts(snapshot, tmp_path / "out")

        assert [p.name for p in paths] == ["x.png", "x_1.png"]
        assert paths[1].read_bytes() == b"2"

    @pytest.mark.unit
    def test_manifest_without_paths(self):
        snapshot = Snapshot(boundary="B", parts=[DecodedPart(content_type="text/html", location="http://a/")])

        assert build_manifest(snapshot) == [
            {"index": 0, "content_type": "text/html", "location": "http://a/", "size_bytes": 0, "root": True}
        ]
