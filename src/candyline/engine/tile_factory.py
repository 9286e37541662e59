from __future__ import annotations

import random
from typing import Tuple

from candyline.components.tile import Tile, new_tile_id
from candyline.constants import BASE_PALETTE_SIZE, PALETTE, PALETTE_LEVEL_STEP, TILE_COLORS


def palette_for_level(level: int) -> Tuple[str, ...]:
    """Spawnable types for a level: a prefix of PALETTE that widens every ten levels."""
    width = min(BASE_PALETTE_SIZE + level // PALETTE_LEVEL_STEP, len(PALETTE))
    return PALETTE[:width]


def create_tile(row: int, col: int, level: int, *, rng: random.Random | None = None) -> Tile:
    rng = rng or random.Random()
    return Tile(
        type_name=rng.choice(palette_for_level(level)),
        tile_id=new_tile_id(),
        row=row,
        col=col,
    )


def color_for(type_name: str) -> Tuple[int, int, int]:
    return TILE_COLORS[type_name]
