from __future__ import annotations

import csv
import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from ttt_engine.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "ttt_engine.cli"]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_cli_evaluate_and_search(tmp_path: Path):
    r = _run_cli(["evaluate", "--board", "111220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "outcome=win_x" in r.stdout + r.stderr
    r = _run_cli(["search", "--board", "110220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "score=1 move=2" in r.stdout + r.stderr
    r = _run_cli(["search", "--board", "000000000", "--scores"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "score=0 move=4" in s and "scores=" in s


def test_cli_search_terminal_board_has_no_move(tmp_path: Path):
    r = _run_cli(["search", "--board", "121212212"], cwd=tmp_path)
    assert r.returncode == 0
    assert "score=0 move=-" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "0123456789", "12345678x"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["evaluate", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2
    r = _run_cli(["search", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_error_wrong_side(tmp_path: Path):
    r = _run_cli(["search", "--board", "110220000", "--side", "O"], cwd=tmp_path)
    assert r.returncode == 2
    r = _run_cli(["search", "--board", "110000000"], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_search_stdin_skips_bad_lines(tmp_path: Path):
    r = _run_cli(["search", "--stdin"], cwd=tmp_path, stdin="000000000\nbogus\n\n110000000\n110220000\n")
    assert r.returncode == 0
    rows = list(csv.reader(io.StringIO(r.stdout)))
    assert rows[0] == ["board", "side", "score", "move"]
    assert rows[1:] == [["000000000", "X", "0", "4"], ["110220000", "X", "1", "2"]]


def test_cli_search_stdin_scores_finished_boards(tmp_path: Path):
    # the full draw has impossible counts but is still scored
    r = _run_cli(["search", "--stdin"], cwd=tmp_path, stdin="121212212\n111220000\n112120200\n")
    assert r.returncode == 0
    rows = list(csv.reader(io.StringIO(r.stdout)))
    assert rows[1:] == [
        ["121212212", "", "0", ""],
        ["111220000", "", "1", ""],
        ["112120200", "", "-1", ""],
    ]


def test_cli_table_to_file(tmp_path: Path):
    out = tmp_path / "tables" / "solved.csv"
    assert main(["table", "--out", str(out)]) == 0
    rows = list(csv.DictReader(out.open()))
    assert len(rows) == 4520
    first = rows[0]
    assert first["board"] == "000000000"
    assert (first["side"], first["score"], first["move"]) == ("X", "0", "4")


def test_cli_play_two_players(tmp_path: Path):
    r = _run_cli(["play", "--mode", "two_players"], cwd=tmp_path, stdin="0\n3\nfoo\n1\n4\n4\n2\n")
    assert r.returncode == 0
    assert "Not a cell index" in r.stdout
    assert "already taken" in r.stdout
    assert "X wins!" in r.stdout


def test_cli_play_against_computer_quit(tmp_path: Path):
    r = _run_cli(["play", "--computer", "X"], cwd=tmp_path, stdin="q\n")
    assert r.returncode == 0
    assert "computer plays 4" in r.stdout


def test_cli_play_against_computer_to_the_end(tmp_path: Path):
    # O tries cells in ascending order until one is free
    r = _run_cli(["play", "--mode", "computer", "--computer", "X"], cwd=tmp_path,
                 stdin="\n".join(str(i) for i in range(9)) * 2 + "\n")
    assert r.returncode == 0
    assert "Draw!" in r.stdout or "The computer wins!" in r.stdout
