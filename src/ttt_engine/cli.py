from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import TextIO

from .board import Mark, format_board, parse_board, serialize_board, side_to_move
from .config import MODES, load_config
from .errors import EngineError, InvalidIndex
from .evaluator import evaluate
from .reachable import solve_all_reachable
from .search import move_scores, search
from .session import GameSession


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_eval = sub.add_parser(
        "evaluate",
        help="Report the outcome of a board (9 chars, 0=empty,1=X,2=O)",
    )
    p_eval.add_argument("--board", required=True, help="Board string, e.g., 120000000")

    p_search = sub.add_parser("search", help="Find the optimal move via exhaustive minimax")
    p_search.add_argument("--board", help="Board string, e.g., 110220000 (omit with --stdin)")
    p_search.add_argument(
        "--side", choices=["X", "O"], default=None,
        help="Side to move (default: derived from mark counts)",
    )
    p_search.add_argument(
        "--scores", action="store_true", help="Also log the score of every legal move"
    )
    p_search.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_table = sub.add_parser("table", help="Write the solved table of reachable positions as CSV")
    p_table.add_argument("--out", type=Path, default=None, help="Output file (default: stdout)")
    p_table.add_argument(
        "--all", action="store_true", help="Include terminal positions as well"
    )

    p_play = sub.add_parser("play", help="Play an interactive game on the terminal")
    p_play.add_argument(
        "--mode", choices=list(MODES), default=None,
        help="computer or two_players (default: $TTT_MODE or computer)",
    )
    p_play.add_argument(
        "--computer", choices=["X", "O"], default=None,
        help="Side the computer plays (default: $TTT_COMPUTER or O)",
    )

    return p


def _write_table(out: TextIO, include_terminal: bool) -> int:
    w = csv.writer(out)
    w.writerow(["board", "side", "outcome", "score", "move"])
    solved = solve_all_reachable(include_terminal=include_terminal)
    for key, res in solved.items():
        b = [int(c) for c in key]
        outcome = evaluate(b)
        side = side_to_move(b).name if not outcome.is_terminal else ""
        w.writerow([key, side, outcome.value, res.score, "" if res.move is None else res.move])
    return len(solved)


def _search_stdin() -> int:
    w = csv.writer(sys.stdout)
    w.writerow(["board", "side", "score", "move"])
    for line in sys.stdin:
        raw = line.strip()
        if not raw:
            continue
        try:
            b = parse_board(raw)
            side = _default_side(b)
            res = search(b, side)
        except EngineError as e:
            logging.debug("skipping %r: %s", raw, e)
            continue
        label = "" if res.move is None else side.name
        w.writerow([serialize_board(b), label, res.score, "" if res.move is None else res.move])
    return 0


def _play(session: GameSession, stdin: TextIO, stdout: TextIO) -> int:
    print(f"mode={session.config.mode} computer={session.computer.name if session.computer else '-'}",
          file=stdout)
    while not session.game_over:
        if session.computer_to_move:
            res = session.computer_move()
            print(f"computer plays {res.move}", file=stdout)
            continue
        print(format_board(session.board), file=stdout)
        print(f"{session.to_move.name} to move (0-8, q to quit): ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line or line.strip().lower() == "q":
            print("", file=stdout)
            return 0
        try:
            session.play(int(line.strip()))
        except ValueError as e:
            # InvalidIndex is a ValueError too; both just re-prompt
            msg = str(e) if isinstance(e, InvalidIndex) else f"Not a cell index: {line.strip()!r}"
            print(msg, file=stdout)
    print(format_board(session.board), file=stdout)
    w = session.outcome.winner
    if w is None:
        print("Draw!", file=stdout)
    elif w is session.computer:
        print("The computer wins!", file=stdout)
    else:
        print(f"{w.name} wins!", file=stdout)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0

    try:
        return _dispatch(parser, ns)
    except EngineError as e:
        logging.error("%s", e)
        return 2


def _dispatch(parser: argparse.ArgumentParser, ns: argparse.Namespace) -> int:
    if ns.cmd == "evaluate":
        b = parse_board(ns.board)
        logging.info("outcome=%s", evaluate(b).value)
        return 0

    if ns.cmd == "search":
        if ns.stdin:
            return _search_stdin()
        if not ns.board:
            logging.error("Provide --board or --stdin.")
            return 2
        b = parse_board(ns.board)
        side = Mark.parse(ns.side) if ns.side else _default_side(b)
        res = search(b, side)
        logging.info("score=%d move=%s", res.score, "-" if res.move is None else res.move)
        if ns.scores:
            logging.info("scores=%s", move_scores(b, side))
        return 0

    if ns.cmd == "table":
        if ns.out is None:
            n = _write_table(sys.stdout, ns.all)
        else:
            ns.out.parent.mkdir(parents=True, exist_ok=True)
            with ns.out.open("w", newline="") as fh:
                n = _write_table(fh, ns.all)
            logging.info("Wrote %d positions to: %s", n, ns.out)
        return 0

    if ns.cmd == "play":
        session = GameSession(config=load_config(ns.mode, ns.computer))
        return _play(session, sys.stdin, sys.stdout)

    parser.print_help()
    return 0


def _default_side(board) -> Mark:
    if evaluate(board).is_terminal:
        # side is irrelevant for a finished game
        return Mark.X
    return side_to_move(board)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
