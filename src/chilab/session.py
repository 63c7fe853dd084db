"""Puzzle sessions for UI-driven or scripted play.

A session owns the mutable position index of one puzzle. Collaborators read it
through immutable snapshots and compare old and new snapshots themselves; the
session does not notify anyone.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from . import puzzles
from .group_finder import calculate_steps, get_piece_mask, is_multi_drag, reconstruct_positions
from .moves import diff_positions, move_pieces
from .position_index import PiecePositionIndex, PositionSnapshot, PosLike, as_pos
from .puzzles import PuzzleConfig
from .solution import calculate_progress
from .types import Pos, Progress, Step

logger = logging.getLogger(__name__)


class PuzzleSession:
    """Manage the piece layout of a single puzzle."""

    def __init__(
        self,
        config: PuzzleConfig,
        positions: Optional[Sequence[Pos]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self._index = PiecePositionIndex()
        if positions is None:
            self.reset(rng)
        else:
            self.assign(positions)

    @property
    def positions(self) -> PositionSnapshot:
        return self._index.snapshot()

    @property
    def directions(self):
        return self.config.directions

    def assign(self, positions: Sequence[Pos]) -> None:
        """Replace the layout; raises ``ValueError`` if it is not valid for this puzzle."""

        positions = list(positions)
        if not puzzles.validate(self.config, positions):
            raise ValueError(f"Invalid {self.config.name} layout")
        self._index.assign(positions)

    def reset(self, rng: Optional[random.Random] = None) -> None:
        logger.info("%s: randomly initializing piece positions", self.config.name)
        self._index.assign(puzzles.random_piece_positions(self.config, rng))

    def progress(self) -> Progress:
        return calculate_progress(self._index, self.directions)

    def is_solved(self) -> bool:
        return self.progress().is_solved()

    def select_group(self, piece: int) -> Tuple[Step, ...]:
        """Return the BFS steps of the group that ``piece`` belongs to."""

        return calculate_steps(self.directions, self._index, piece)

    def select_mask(self, piece: int) -> int:
        return get_piece_mask(self.select_group(piece))

    def move(self, piece: int, dst: PosLike) -> Tuple[int, ...]:
        """Move or swap a single piece. Returns the indices of pieces that moved."""

        return self.drag(1 << piece, None, dst)

    def drag_group(self, piece: int, dst: PosLike) -> Tuple[int, ...]:
        """Move the whole group of ``piece`` so that ``piece`` lands on ``dst``."""

        steps = self.select_group(piece)
        mask = get_piece_mask(steps)
        return self.drag(mask, steps if is_multi_drag(mask) else None, dst)

    def drag(self, pieces: int, steps: Optional[Sequence[Step]], dst: PosLike) -> Tuple[int, ...]:
        """Complete a drag. Drops that would put a piece off a bounded grid are ignored."""

        if self.config.bounded and not self._inside_grid(steps, as_pos(dst)):
            logger.debug("%s: drop at %s leaves the grid; ignored", self.config.name, dst)
            return ()
        before = self._index.snapshot()
        if not move_pieces(self._index, pieces, steps, dst):
            return ()
        changed = diff_positions(before, self._index)
        logger.debug("%s: pieces %s changed position", self.config.name, list(changed))
        return changed

    def _inside_grid(self, steps: Optional[Sequence[Step]], dst: Pos) -> bool:
        targets = reconstruct_positions(steps, dst) if steps else (dst,)
        return all(0 <= p.x < self.config.grid_width and 0 <= p.y < self.config.grid_height for p in targets)

    def encode(self) -> str:
        return puzzles.encode(self.config, self._index.to_list())

    def restore(self, text: Optional[str]) -> bool:
        """Replace the layout with a decoded state string.

        Returns ``False`` and keeps the current layout if the string is missing,
        malformed or not a valid layout.
        """

        if text is None:
            return False
        positions = puzzles.decode(self.config, text)
        if positions is None:
            return False
        self._index.assign(positions)
        logger.info("%s: restored piece positions", self.config.name)
        return True


def state_key(name: str) -> str:
    return f"{name}-pieces"


class AppState:
    """One session per preset puzzle, persisted as a mapping of state strings."""

    def __init__(self, sessions: Optional[Dict[str, PuzzleSession]] = None, rng: Optional[random.Random] = None) -> None:
        self.sessions: Dict[str, PuzzleSession] = dict(sessions or {})
        for name in puzzles.PRESET_NAMES:
            if name not in self.sessions:
                self.sessions[name] = PuzzleSession(puzzles.preset_puzzle(name), rng=rng)

    def __getitem__(self, name: str) -> PuzzleSession:
        return self.sessions[name]

    @classmethod
    def from_mapping(cls, saved: Mapping[str, str], rng: Optional[random.Random] = None) -> "AppState":
        """Restore every session whose saved string is valid; the rest start fresh."""

        sessions: Dict[str, PuzzleSession] = {}
        for name in puzzles.PRESET_NAMES:
            config = puzzles.preset_puzzle(name)
            text = saved.get(state_key(name))
            positions = puzzles.decode(config, text) if text is not None else None
            if positions is not None:
                sessions[name] = PuzzleSession(config, positions)
        state = cls(sessions, rng=rng)
        logger.info("loaded saved state for %s", sorted(sessions) or "no puzzles")
        return state

    def to_mapping(self) -> Dict[str, str]:
        return {state_key(name): session.encode() for name, session in self.sessions.items()}

    def inject(self, values: Mapping[str, str]) -> List[str]:
        """Apply externally supplied state strings. Returns the keys that were accepted."""

        accepted: List[str] = []
        for name, session in self.sessions.items():
            key = state_key(name)
            if key in values and session.restore(values[key]):
                accepted.append(key)
        unknown = set(values) - {state_key(name) for name in self.sessions}
        if unknown:
            logger.warning("ignoring unknown state keys: %s", sorted(unknown))
        return accepted
