"""Host-side board mutations: dealing dice, re-rolling one die, swapping tiles.

A dealt board is a row-major list of 25 :class:`Tile` values. Every operation
returns a new list so a board handed to the solver is never changed under it.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from wordgrid.board import GRID_SIZE
from wordgrid.errors import InvalidBoard
from wordgrid.lexicon import LETTERS

# 25-die set; the Q face stands alone since cells hold exactly one letter
DICE: tuple[str, ...] = (
    "aaafrs", "aaeeee", "aafirs", "adennn", "aeeeem",
    "aeegmu", "aegmnn", "afirsy", "bjkqxz", "ccenst",
    "ceiilt", "ceilpt", "ceipst", "ddhnot", "dhhlor",
    "dhlnor", "dhlnor", "eiiitt", "emottt", "ensssu",
    "fiprsy", "gorrvw", "iprrry", "nootuw", "ooottu",
)


@dataclass(frozen=True)
class Tile:
    letter: str
    faces: str

    def to_dict(self) -> dict:
        return {"letter": self.letter, "faces": self.faces}


def _check_die(faces) -> str:
    if not isinstance(faces, str) or not faces:
        raise InvalidBoard(f"A die needs at least one face, got {faces!r}")
    faces = faces.lower()
    if not LETTERS.issuperset(faces):
        raise InvalidBoard(f"Die faces must be letters, got {faces!r}")
    return faces


def deal(rng: random.Random, dice: Sequence[str] = DICE) -> list[Tile]:
    """Shuffle the dice into the grid and roll each one."""
    if len(dice) != GRID_SIZE * GRID_SIZE:
        raise InvalidBoard(f"Need {GRID_SIZE * GRID_SIZE} dice, got {len(dice)}")
    shuffled = [_check_die(d) for d in dice]
    rng.shuffle(shuffled)
    return [Tile(rng.choice(faces), faces) for faces in shuffled]


def _check_index(tiles: Sequence[Tile], idx) -> int:
    if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(tiles):
        raise InvalidBoard(f"Tile index must be in 0..{len(tiles) - 1}, got {idx!r}")
    return idx


def reroll(tiles: Sequence[Tile], idx: int, rng: random.Random) -> list[Tile]:
    """Roll the die at ``idx`` again; the new face may repeat the old one."""
    idx = _check_index(tiles, idx)
    rolled = list(tiles)
    faces = rolled[idx].faces
    rolled[idx] = Tile(rng.choice(faces), faces)
    return rolled


def swap(tiles: Sequence[Tile], i: int, j: int) -> list[Tile]:
    """Exchange two tiles, dice included."""
    i = _check_index(tiles, i)
    j = _check_index(tiles, j)
    swapped = list(tiles)
    swapped[i], swapped[j] = swapped[j], swapped[i]
    return swapped


def to_board(tiles: Sequence[Tile], grid_size: int = GRID_SIZE) -> list[list[str]]:
    return [[t.letter for t in tiles[r * grid_size:(r + 1) * grid_size]] for r in range(grid_size)]


def tiles_from_json(data) -> list[Tile]:
    """Rebuild tiles sent back by a client as ``[{"letter": .., "faces": ..}, ...]``."""
    if not isinstance(data, list) or len(data) != GRID_SIZE * GRID_SIZE:
        raise InvalidBoard(f"Expected {GRID_SIZE * GRID_SIZE} tiles")

    tiles = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidBoard(f"Tile {i} must be an object")
        faces = _check_die(item.get("faces"))
        letter = item.get("letter")
        if not isinstance(letter, str) or len(letter) != 1 or letter.lower() not in faces:
            raise InvalidBoard(f"Tile {i} shows {letter!r}, which is not a face of {faces!r}")
        tiles.append(Tile(letter.lower(), faces))
    return tiles
