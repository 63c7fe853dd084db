"""Command line tools for China Labyrinth puzzle states.

Usage examples:
- Random layout: ``python -m chilab.cli new --puzzle hex --seed 7``
- Check a state: ``python -m chilab.cli check --puzzle rect --state 0,0,2,0,... --show``
- Move a group: ``python -m chilab.cli move --puzzle rect --state ... --piece 3 --to 4,2 --group``
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional

from . import adapter_stdio
from .board_text import format_board, format_progress
from .group_finder import get_pieces
from .puzzles import PRESET_NAMES, PuzzleConfig, preset_puzzle
from .session import PuzzleSession
from .types import Pos, Rect


def _parse_pos(raw: str) -> Pos:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("position must look like X,Y")
    try:
        return Pos(int(parts[0]), int(parts[1]))
    except ValueError as exc:
        raise argparse.ArgumentTypeError("position must look like X,Y") from exc


def _load_session(config: PuzzleConfig, state: str) -> Optional[PuzzleSession]:
    session = PuzzleSession(config)
    if not session.restore(state):
        return None
    return session


def _print_board(session: PuzzleSession) -> None:
    config = session.config
    area = Rect(0, 0, config.grid_width, config.grid_height) if config.bounded else None
    print(format_board(session.positions, area))


def _cmd_new(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    session = PuzzleSession(preset_puzzle(args.puzzle), rng=rng)
    print(session.encode())
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    session = _load_session(preset_puzzle(args.puzzle), args.state)
    if session is None:
        print(f"Invalid {args.puzzle} state", file=sys.stderr)
        return 1
    if args.show:
        _print_board(session)
    print(format_progress(session.progress()))
    return 0


def _cmd_group(args: argparse.Namespace) -> int:
    session = _load_session(preset_puzzle(args.puzzle), args.state)
    if session is None:
        print(f"Invalid {args.puzzle} state", file=sys.stderr)
        return 1
    if not 0 <= args.piece < session.config.piece_count:
        print(f"piece must be between 0 and {session.config.piece_count - 1}", file=sys.stderr)
        return 1
    print(" ".join(str(i) for i in get_pieces(session.select_group(args.piece))))
    return 0


def _cmd_move(args: argparse.Namespace) -> int:
    session = _load_session(preset_puzzle(args.puzzle), args.state)
    if session is None:
        print(f"Invalid {args.puzzle} state", file=sys.stderr)
        return 1
    if not 0 <= args.piece < session.config.piece_count:
        print(f"piece must be between 0 and {session.config.piece_count - 1}", file=sys.stderr)
        return 1
    if args.group:
        changed = session.drag_group(args.piece, args.to)
    else:
        changed = session.move(args.piece, args.to)
    print(session.encode())
    print(f"moved: {' '.join(str(i) for i in changed) or '-'}")
    print(format_progress(session.progress()))
    return 0


def _cmd_stdio(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    adapter = adapter_stdio.StdioAdapter(PuzzleSession(preset_puzzle(args.puzzle), rng=rng), quiet=args.quiet)
    return adapter.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="China Labyrinth puzzle tools")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def _add_puzzle(p: argparse.ArgumentParser) -> None:
        p.add_argument("--puzzle", choices=PRESET_NAMES, default="rect", help="Puzzle preset")

    p_new = sub.add_parser("new", help="Print a random layout")
    _add_puzzle(p_new)
    p_new.add_argument("--seed", type=int, help="Random seed")
    p_new.set_defaults(func=_cmd_new)

    p_check = sub.add_parser("check", help="Validate a state and print its progress")
    _add_puzzle(p_check)
    p_check.add_argument("--state", required=True, help="Encoded state string")
    p_check.add_argument("--show", action="store_true", help="Print the board")
    p_check.set_defaults(func=_cmd_check)

    p_group = sub.add_parser("group", help="Print the group a piece belongs to")
    _add_puzzle(p_group)
    p_group.add_argument("--state", required=True, help="Encoded state string")
    p_group.add_argument("--piece", type=int, required=True, help="Piece index")
    p_group.set_defaults(func=_cmd_group)

    p_move = sub.add_parser("move", help="Move a piece (or its group) and print the new state")
    _add_puzzle(p_move)
    p_move.add_argument("--state", required=True, help="Encoded state string")
    p_move.add_argument("--piece", type=int, required=True, help="Piece index")
    p_move.add_argument("--to", type=_parse_pos, required=True, help="Destination as X,Y")
    p_move.add_argument("--group", action="store_true", help="Move the piece's whole group")
    p_move.set_defaults(func=_cmd_move)

    p_stdio = sub.add_parser("stdio", help="Run the line protocol on stdin/stdout")
    _add_puzzle(p_stdio)
    p_stdio.add_argument("--seed", type=int, help="Seed for the initial random layout")
    p_stdio.add_argument("--quiet", action="store_true", help="Suppress stderr trace")
    p_stdio.set_defaults(func=_cmd_stdio)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
