from __future__ import annotations

import logging
import threading
from typing import Sequence

from wordgrid.board import GRID_SIZE, Path, adjacency, snapshot_board
from wordgrid.errors import SolveCancelled
from wordgrid.lexicon import Lexicon, TrieNode
from wordgrid.results import SolveResult

logger = logging.getLogger("wordgrid")

DEFAULT_MIN_WORD_LENGTH = 3


def solve(
    board: Sequence[Sequence[str]],
    lexicon: Lexicon,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
    cancel: threading.Event | None = None,
    sequence: int | None = None,
) -> SolveResult:
    """Find every word on the board using DFS with trie prefix pruning.

    Each of the 25 cells starts its own search with a fresh visited bitmask.
    A word reachable along K distinct paths is recorded K times and merged
    into one FoundWord carrying all K paths.

    Raises InvalidBoard before searching if the board is malformed, and
    SolveCancelled if ``cancel`` gets set mid-search.
    """
    if min_word_length < 1:
        raise ValueError(f"min_word_length must be at least 1, got {min_word_length}")

    grid_size = GRID_SIZE
    cells = snapshot_board(board, grid_size)
    neighbors = adjacency(grid_size)

    occurrences: dict[str, list[Path]] = {}
    path: list[int] = []

    def dfs(idx: int, node: TrieNode, visited: int):
        if cancel is not None and cancel.is_set():
            raise SolveCancelled("Solve cancelled")

        current = node.children.get(cells[idx])
        if current is None:  # no dictionary word has this prefix
            return

        path.append(idx)
        if current.is_word and len(path) >= min_word_length:
            word = "".join(cells[i] for i in path)
            occurrences.setdefault(word, []).append(tuple(divmod(i, grid_size) for i in path))

        if current.children:
            for nidx in neighbors[idx]:
                if not (visited & (1 << nidx)):
                    dfs(nidx, current, visited | (1 << nidx))

        path.pop()

    for start in range(grid_size * grid_size):
        dfs(start, lexicon.root, 1 << start)

    result = SolveResult.from_occurrences(occurrences, grid_size, sequence)
    logger.debug(
        "Solved board %s: %d words, %d paths",
        "".join(cells), len(result), result.path_count,
    )
    return result
