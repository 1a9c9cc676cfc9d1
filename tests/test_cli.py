"""Tests for spirerun.cli."""

import csv
import shutil
from pathlib import Path

import pytest

from spirerun.cli import main, read_report


def _read_csv_rows(path: Path) -> list[dict]:
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


class TestReadReport:
    def test_text_file(self, fixtures_dir: Path) -> None:
        text = read_report(fixtures_dir / "tickler_a20.txt")
        assert "Submitted by:" in text

    def test_html_by_extension(self, fixtures_dir: Path) -> None:
        text = read_report(fixtures_dir / "run_page.html")
        assert text.startswith("Ascension-20")

    def test_html_by_content(self, fixtures_dir: Path, tmp_path: Path) -> None:
        path = tmp_path / "page.txt"
        shutil.copy(fixtures_dir / "run_page.html", path)
        assert read_report(path).startswith("Ascension-20")

    def test_forced_text_format(self, fixtures_dir: Path) -> None:
        text = read_report(fixtures_dir / "run_page.html", "text")
        assert text.startswith("<!DOCTYPE html>")


class TestMain:
    def test_writes_csv(self, fixtures_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "runs.csv"
        main([
            str(fixtures_dir / "tickler_a20.txt"),
            str(fixtures_dir / "mayberry_seeded.txt"),
            "--out", str(out),
        ])
        rows = _read_csv_rows(out)
        assert [r["runner"] for r in rows] == ["Mayberry", "Tickler"]

    def test_rejected_report_skipped(self, fixtures_dir: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.txt"
        bad.write_text("Ascension-19 Unseeded - Ironclad in 1s", encoding="utf-8")
        out = tmp_path / "runs.csv"
        main([str(bad), str(fixtures_dir / "tickler_a20.txt"), "--out", str(out)])
        assert len(_read_csv_rows(out)) == 1

    def test_nothing_parsed_exits_1(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.txt"
        bad.write_text("not a run", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(bad), "--out", str(tmp_path / "runs.csv")])
        assert exc.value.code == 1
        assert not (tmp_path / "runs.csv").exists()

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.txt"), "--out", str(tmp_path / "runs.csv")])
        assert exc.value.code == 1

    def test_undecodable_file_skipped(self, fixtures_dir: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.txt"
        bad.write_bytes(b"\xff\xfe garbage")
        out = tmp_path / "runs.csv"
        main([str(bad), str(fixtures_dir / "tickler_a20.txt"), "--out", str(out)])
        rows = _read_csv_rows(out)
        assert [r["runner"] for r in rows] == ["Tickler"]
