"""Stdio adapter for scripted play and state injection.

The adapter reads a line-oriented protocol from stdin and answers every command
with a single line on stdout starting with ``OK`` or ``ERROR`` (``BOARD`` prints
the board rows before its ``OK``). Processing stops at the first error; the live
layout is never touched by a command that fails.

Commands::

    LOAD <state>            replace the layout with an encoded state
    NEW [seed]              random layout
    MOVE <piece> <x> <y>    move or swap one piece
    DRAG <piece> <x> <y>    move the piece's whole group, anchored on the piece
    GROUP <piece>           list the pieces in the piece's group
    PROGRESS                groups, disconnections and overlaps
    STATE                   encoded layout
    BOARD                   text dump of the layout
    QUIT
"""

from __future__ import annotations

import argparse
import random
import sys
from typing import Iterable, List, Optional, Tuple

from .board_text import format_board, format_progress
from .group_finder import get_pieces
from .puzzles import PRESET_NAMES, preset_puzzle
from .session import PuzzleSession
from .types import Pos, Rect


class AdapterInputError(Exception):
    """Raised when the adapter receives invalid input."""


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise AdapterInputError(f"{what} must be an integer") from exc


def _parse_piece_and_pos(tokens: List[str], session: PuzzleSession) -> Tuple[int, Pos]:
    if len(tokens) != 4:
        raise AdapterInputError(f"{tokens[0]} requires a piece and x y coordinates")
    piece = _parse_int(tokens[1], "piece")
    if not 0 <= piece < session.config.piece_count:
        raise AdapterInputError(f"piece must be between 0 and {session.config.piece_count - 1}")
    return piece, Pos(_parse_int(tokens[2], "x"), _parse_int(tokens[3], "y"))


class StdioAdapter:
    """Line-oriented adapter that drives one puzzle session via stdin/stdout."""

    def __init__(
        self,
        session: PuzzleSession,
        *,
        stdin=None,
        stdout=None,
        stderr=None,
        quiet: bool = False,
    ) -> None:
        self.session = session
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.quiet = quiet

    def _log(self, message: str, *, force: bool = False) -> None:
        if self.quiet and not force:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def _reply(self, message: str) -> None:
        print(message, file=self.stdout)
        self.stdout.flush()

    def _emit_error_and_exit(self, message: str) -> int:
        self._log(f"ERROR {message}", force=True)
        self._reply(f"ERROR {message}")
        return 1

    def _changed(self, changed: Iterable[int]) -> str:
        pieces = " ".join(str(i) for i in changed)
        return f"OK moved {pieces}".rstrip()

    def _handle_load(self, tokens: List[str]) -> str:
        if len(tokens) != 2:
            raise AdapterInputError("LOAD requires a state string")
        if not self.session.restore(tokens[1]):
            raise AdapterInputError("state is not a valid layout")
        return "OK"

    def _handle_new(self, tokens: List[str]) -> str:
        rng = random.Random(_parse_int(tokens[1], "seed")) if len(tokens) > 1 else None
        self.session.reset(rng)
        return f"OK {self.session.encode()}"

    def _handle_move(self, tokens: List[str]) -> str:
        piece, dst = _parse_piece_and_pos(tokens, self.session)
        changed = self.session.move(piece, dst)
        self._log(f"move piece={piece} to={dst.x},{dst.y} changed={list(changed)}")
        return self._changed(changed)

    def _handle_drag(self, tokens: List[str]) -> str:
        piece, dst = _parse_piece_and_pos(tokens, self.session)
        changed = self.session.drag_group(piece, dst)
        self._log(f"drag piece={piece} to={dst.x},{dst.y} changed={list(changed)}")
        return self._changed(changed)

    def _handle_group(self, tokens: List[str]) -> str:
        if len(tokens) != 2:
            raise AdapterInputError("GROUP requires a piece")
        piece = _parse_int(tokens[1], "piece")
        if not 0 <= piece < self.session.config.piece_count:
            raise AdapterInputError(f"piece must be between 0 and {self.session.config.piece_count - 1}")
        pieces = get_pieces(self.session.select_group(piece))
        return "OK " + " ".join(str(i) for i in pieces)

    def _handle_board(self) -> str:
        config = self.session.config
        area = None
        if config.bounded:
            area = Rect(0, 0, config.grid_width, config.grid_height)
        self._reply(format_board(self.session.positions, area))
        return "OK"

    def handle(self, line: str) -> Optional[str]:
        """Process one command line. Returns the reply, or ``None`` for ``QUIT``."""

        tokens = line.split()
        cmd = tokens[0].upper()
        if cmd == "LOAD":
            return self._handle_load(tokens)
        if cmd == "NEW":
            return self._handle_new(tokens)
        if cmd == "MOVE":
            return self._handle_move(tokens)
        if cmd == "DRAG":
            return self._handle_drag(tokens)
        if cmd == "GROUP":
            return self._handle_group(tokens)
        if cmd == "PROGRESS":
            return f"OK {format_progress(self.session.progress())}"
        if cmd == "STATE":
            return f"OK {self.session.encode()}"
        if cmd == "BOARD":
            return self._handle_board()
        if cmd == "QUIT":
            return None
        raise AdapterInputError(f"Unknown command '{cmd}'")

    def run(self) -> int:
        try:
            for raw_line in self.stdin:
                line = raw_line.strip()
                if not line:
                    continue
                reply = self.handle(line)
                if reply is None:
                    break
                self._reply(reply)
            return 0
        except AdapterInputError as exc:
            return self._emit_error_and_exit(str(exc))


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Stdio adapter for China Labyrinth puzzles")
    parser.add_argument("--puzzle", choices=PRESET_NAMES, default="rect", help="Puzzle to play")
    parser.add_argument("--seed", type=int, help="Seed for the initial random layout")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress verbose stderr logs (protocol still goes to stdout)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    rng = random.Random(args.seed) if args.seed is not None else None
    adapter = StdioAdapter(PuzzleSession(preset_puzzle(args.puzzle), rng=rng), quiet=args.quiet)
    sys.exit(adapter.run())


if __name__ == "__main__":
    main()
