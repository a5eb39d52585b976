from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from wordgrid.board import GRID_SIZE, Coord, Path

DISPLAY_MODES = ("paths", "count")


def rank_key(word: str) -> tuple[int, str]:
    """Longest first, then alphabetical."""
    return (-len(word), word)


@dataclass(frozen=True)
class FoundWord:
    word: str
    paths: tuple[Path, ...]

    def __post_init__(self):
        if not self.paths:
            raise ValueError(f"FoundWord {self.word!r} needs at least one path")

    @property
    def count(self) -> int:
        return len(self.paths)

    @property
    def path(self) -> Path:
        """Representative path: the first one the search discovered."""
        return self.paths[0]


@dataclass(frozen=True)
class SolveResult:
    """Ranked words found on one board snapshot.

    Analytics (heatmap, max usage) are derived from the paths every time they
    are asked for; a result never outlives the board it was computed from.
    """

    words: tuple[FoundWord, ...] = ()
    grid_size: int = GRID_SIZE
    sequence: int | None = None
    _index: dict[str, FoundWord] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {fw.word: fw for fw in self.words})

    @classmethod
    def from_occurrences(
        cls,
        occurrences: dict[str, list[Path]],
        grid_size: int = GRID_SIZE,
        sequence: int | None = None,
    ) -> SolveResult:
        ranked = sorted(occurrences, key=rank_key)
        words = tuple(FoundWord(word, tuple(occurrences[word])) for word in ranked)
        return cls(words=words, grid_size=grid_size, sequence=sequence)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[FoundWord]:
        return iter(self.words)

    @property
    def texts(self) -> list[str]:
        return [fw.word for fw in self.words]

    @property
    def path_count(self) -> int:
        return sum(fw.count for fw in self.words)

    def find(self, word: str) -> FoundWord | None:
        return self._index.get(word.lower())

    def paths_for(self, word: str) -> tuple[Path, ...]:
        fw = self.find(word)
        return fw.paths if fw is not None else ()

    def usage_grid(self) -> np.ndarray:
        """Per-cell count of (word, path) occurrences passing through it."""
        grid = np.zeros((self.grid_size, self.grid_size), dtype=np.int64)
        for fw in self.words:
            for path in fw.paths:
                rows, cols = zip(*path)
                # cells within one path are distinct, so fancy-index add is exact
                grid[list(rows), list(cols)] += 1
        return grid

    def heatmap(self) -> dict[Coord, int]:
        grid = self.usage_grid()
        return {
            (r, c): int(grid[r, c])
            for r in range(self.grid_size)
            for c in range(self.grid_size)
        }

    def max_usage(self) -> int:
        return int(self.usage_grid().max())

    def to_dict(self, mode: str = "paths", limit: int = 0) -> dict:
        """Serialize for the host UI.

        ``mode="paths"`` lists every path per word, ``mode="count"`` gives the
        occurrence count and one representative path. ``limit`` truncates the
        word list (0 keeps everything); the heatmap always covers all words.
        """
        if mode not in DISPLAY_MODES:
            raise ValueError(f"Unknown display mode {mode!r}, expected one of {DISPLAY_MODES}")

        shown = self.words[:limit] if limit > 0 else self.words
        entries = []
        for fw in shown:
            entry = {"word": fw.word, "count": fw.count}
            if mode == "paths":
                entry["paths"] = [[list(coord) for coord in path] for path in fw.paths]
            else:
                entry["path"] = [list(coord) for coord in fw.path]
            entries.append(entry)

        grid = self.usage_grid()
        return {
            "sequence": self.sequence,
            "mode": mode,
            "word_count": len(self.words),
            "words": entries,
            "heatmap": grid.tolist(),
            "max_usage": int(grid.max()),
        }
