"""Puzzle definitions: the rectangular and hexagonal China Labyrinth boards."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .directions import Direction, directions_for
from .group_finder import MAX_MASK_PIECES
from .state_codec import (
    PACKED_BITS,
    StateDecodeError,
    decode_packed,
    decode_positions,
    encode_packed,
    encode_positions,
    validate_positions,
)
from .types import Pos

logger = logging.getLogger(__name__)

CODECS = ("decimal", "packed")


@dataclass(frozen=True)
class PuzzleConfig:
    name: str
    piece_count: int
    grid_width: int
    grid_height: int
    topology: str = "rect"
    spacing: int = 2
    codec: str = "decimal"
    coord_bits: int = 8
    bounded: bool = True

    def __post_init__(self) -> None:
        directions_for(self.topology)
        if self.codec not in CODECS:
            raise ValueError(f"Unknown codec '{self.codec}'")
        if self.codec == "packed":
            if self.coord_bits not in PACKED_BITS:
                raise ValueError(f"coord_bits must be one of {PACKED_BITS}")
            if not self.bounded:
                raise ValueError("packed codec requires a bounded grid")
            limit = 1 << self.coord_bits
            if self.grid_width > limit or self.grid_height > limit:
                raise ValueError(
                    f"{self.grid_width}x{self.grid_height} grid does not fit {self.coord_bits}-bit packing"
                )
        if not 0 < self.piece_count <= MAX_MASK_PIECES:
            raise ValueError(f"piece_count must be between 1 and {MAX_MASK_PIECES}")
        if self.spacing < 1:
            raise ValueError("spacing must be positive")
        if len(start_cells(self)) < self.piece_count:
            raise ValueError(f"{self.grid_width}x{self.grid_height} grid cannot hold {self.piece_count} pieces")

    @property
    def directions(self) -> Tuple[Direction, ...]:
        return directions_for(self.topology)


def preset_puzzle(name: str) -> PuzzleConfig:
    preset = name.lower()
    if preset == "rect":
        return PuzzleConfig(name="rect", piece_count=15, grid_width=9, grid_height=9, topology="rect")
    if preset == "hex":
        return PuzzleConfig(name="hex", piece_count=63, grid_width=17, grid_height=16, topology="hex")
    raise ValueError(f"Unknown puzzle preset '{name}'")


PRESET_NAMES = ("rect", "hex")


def start_cells(config: PuzzleConfig) -> List[Pos]:
    """Cells used for random layouts: every ``spacing``-th column and row, so no two touch."""

    return [
        Pos(x, y)
        for y in range(0, config.grid_height, config.spacing)
        for x in range(0, config.grid_width, config.spacing)
    ]


def random_piece_positions(config: PuzzleConfig, rng: Optional[random.Random] = None) -> List[Pos]:
    generator = rng or random.Random()
    cells = start_cells(config)
    generator.shuffle(cells)
    return cells[: config.piece_count]


def validate(config: PuzzleConfig, positions: Optional[Sequence[Pos]]) -> bool:
    if positions is None:
        return False
    if config.bounded:
        return validate_positions(positions, config.piece_count, config.grid_width, config.grid_height)
    return validate_positions(positions, config.piece_count)


def encode(config: PuzzleConfig, positions: Sequence[Pos]) -> str:
    if config.codec == "packed":
        return encode_packed(positions, config.coord_bits)
    return encode_positions(positions)


def decode(config: PuzzleConfig, text: str) -> Optional[List[Pos]]:
    """Decode and validate a state string. Returns ``None`` instead of raising."""

    try:
        if config.codec == "packed":
            positions = decode_packed(text, config.coord_bits)
        else:
            positions = decode_positions(text)
    except StateDecodeError as exc:
        logger.warning("%s: failed to decode state: %s", config.name, exc)
        return None
    if not validate(config, positions):
        logger.warning("%s: decoded state is not a valid layout of %d pieces", config.name, config.piece_count)
        return None
    return positions
