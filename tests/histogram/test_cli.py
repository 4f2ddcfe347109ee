"""Tests for the hash-histogram CLI and ranking report."""
from __future__ import annotations

import io
from pathlib import Path

import pytest

from hash_histogram import HashHistogram
from hash_histogram.cli import main
from hash_histogram.report import format_ranking


@pytest.fixture
def words_file(tmp_path: Path) -> Path:
    path = tmp_path / "words.txt"
    path.write_text("a b a\nb c b\na b\n", encoding="utf-8")
    return path


class TestReport:
    def test_format_ranking(self, letters: HashHistogram[str, int]) -> None:
        text = format_ranking(letters)
        lines = text.splitlines()
        assert lines[0] == "=== Ranking ==="
        assert lines[3].split() == ["1", "b", "4", "50.0%"]
        assert lines[4].split() == ["2", "a", "3", "37.5%"]
        assert lines[5].split() == ["3", "c", "1", "12.5%"]
        assert lines[-1] == "Keys: 3   Total: 8"

    def test_top(self, letters: HashHistogram[str, int]) -> None:
        text = format_ranking(letters, top=1, label="Top")
        assert text.startswith("=== Top ===")
        assert " b " in text
        assert " c " not in text

    def test_empty(self, empty: HashHistogram[str, int]) -> None:
        assert format_ranking(empty).splitlines()[-1] == "Keys: 0   Total: 0"


class TestCLI:
    def test_rank(self, words_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["rank", str(words_file)])
        out = capsys.readouterr().out
        assert "Keys: 3   Total: 8" in out
        assert out.index(" b ") < out.index(" a ") < out.index(" c ")

    def test_rank_top_and_normalize(
        self, words_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["rank", str(words_file), "--top", "2", "--normalize", "16"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[3].split()[:3] == ["1", "b", "8"]
        assert lines[4].split()[:3] == ["2", "a", "6"]
        assert "Total: 16" in out

    def test_mode(self, words_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["mode", str(words_file)])
        assert capsys.readouterr().out == "b\n"

    def test_mode_from_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("x y x\n"))
        main(["mode"])
        assert capsys.readouterr().out == "x\n"

    def test_mode_empty_input(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["mode", str(path)])
        assert exc_info.value.code == 1
        assert "no mode" in capsys.readouterr().err

    def test_normalize_empty_input(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["rank", str(path), "--normalize", "1.0"])
        assert exc_info.value.code == 2
        assert "total is zero" in capsys.readouterr().err

    def test_sample(self, words_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["sample", str(words_file), "--draws", "25", "--seed", "42"])
        picks = capsys.readouterr().out.split()
        assert len(picks) == 25
        assert set(picks) <= {"a", "b", "c"}

    def test_sample_seed_reproducible(
        self, words_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["sample", str(words_file), "--seed", "3"])
        first = capsys.readouterr().out
        main(["sample", str(words_file), "--seed", "3"])
        assert capsys.readouterr().out == first

    def test_rank_negative_normalize(
        self, words_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["rank", str(words_file), "--normalize", "-5"])
        assert exc_info.value.code == 2
        assert "non-negative" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [
        ["rank", "--top", "-1"],
        ["sample", "--draws", "-3"],
    ])
    def test_negative_sizes_rejected(
        self, argv: list[str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2
        assert "must be >= 0" in capsys.readouterr().err

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "hash-histogram" in capsys.readouterr().out
