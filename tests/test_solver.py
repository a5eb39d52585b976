import itertools
import random
import threading
import time

import pytest

from wordgrid.board import is_adjacent
from wordgrid.errors import InvalidBoard, SolveCancelled
from wordgrid.lexicon import Lexicon
from wordgrid.solver import solve

BOARD = [
    ["c", "a", "t", "s", "e"],
    ["r", "e", "p", "o", "n"],
    ["b", "o", "n", "e", "s"],
    ["d", "i", "g", "s", "t"],
    ["e", "a", "r", "t", "h"],
]

WORDS = ["cat", "cats", "car", "care", "bone", "bones", "rep", "pen", "pone",
         "dig", "digs", "one", "ones", "ape", "nod", "nog", "son", "repo",
         "open", "nope", "peon", "sing", "sign", "earth", "art", "rat", "tea",
         "set", "nest", "tone", "stone", "zebra", "ee"]


def _brute_paths(board: list[list[str]], word: str) -> set:
    """Every non-repeating king-move path spelling word, found without a trie."""
    n = len(board)
    found = set()

    def walk(path):
        if len(path) == len(word):
            found.add(tuple(path))
            return
        r, c = path[-1]
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                nr, nc = r + dr, c + dc
                if (dr or dc) and 0 <= nr < n and 0 <= nc < n and (nr, nc) not in path \
                        and board[nr][nc] == word[len(path)]:
                    walk(path + [(nr, nc)])

    for r in range(n):
        for c in range(n):
            if board[r][c] == word[0]:
                walk([(r, c)])
    return found


def _filler_board(rows: dict[int, list[str]]) -> list[list[str]]:
    board = [["x"] * 5 for _ in range(5)]
    for r, letters in rows.items():
        board[r] = list(letters)
    return board


def test_basic_solve():
    result = solve(BOARD, Lexicon.build(WORDS))
    texts = result.texts
    assert "cat" in texts
    assert "cats" in texts
    assert "bone" in texts
    assert "earth" in texts
    assert "zebra" not in texts
    for w in texts:
        assert w in WORDS


def test_matches_brute_force_enumeration():
    result = solve(BOARD, Lexicon.build(WORDS))
    for w in WORDS:
        expected = _brute_paths(BOARD, w) if len(w) >= 3 else set()
        assert set(result.paths_for(w)) == expected, w
        fw = result.find(w)
        if expected:
            assert fw.count == len(expected)
        else:
            assert fw is None


def test_cat_cats_act_example():
    board = _filler_board({0: ["c", "a", "t", "x", "x"], 1: ["x", "x", "x", "s", "x"]})
    result = solve(board, Lexicon.build(["cat", "cats", "act"]))
    assert result.texts == ["cats", "cat"]
    assert result.find("cat").paths == (((0, 0), (0, 1), (0, 2)),)
    assert result.find("cats").paths == (((0, 0), (0, 1), (0, 2), (1, 3)),)
    # 'c' and 't' are not adjacent, so "act" cannot be traced
    assert result.find("act") is None


def test_same_letter_board_dedups_by_text():
    board = [["e"] * 5 for _ in range(5)]
    result = solve(board, Lexicon.build(["eee"]))
    assert result.texts == ["eee"]
    fw = result.words[0]
    # sum of deg(v) * (deg(v) - 1) over the middle cell: 4*3*2 + 12*5*4 + 9*8*7
    assert fw.count == 768
    assert len(set(fw.paths)) == fw.count


def test_empty_dictionary():
    result = solve(BOARD, Lexicon.build([]))
    assert len(result) == 0
    assert result.words == ()
    heat = result.heatmap()
    assert len(heat) == 25
    assert all(v == 0 for v in heat.values())
    assert result.max_usage() == 0


def test_no_revisit():
    """A word requiring revisiting a cell should not be found."""
    board = _filler_board({0: ["a", "b", "x", "x", "x"]})
    result = solve(board, Lexicon.build(["aba", "abx", "bab"]))
    assert result.find("aba") is None
    assert result.find("bab") is None
    assert result.find("abx") is not None


def test_paths_distinct_adjacent_and_spell_word():
    lex = Lexicon.build(WORDS)
    result = solve(BOARD, lex)
    for fw in result:
        assert lex.contains_word(fw.word)
        for path in fw.paths:
            assert len(set(path)) == len(path)
            for a, b in zip(path, path[1:]):
                assert is_adjacent(a, b)
            assert "".join(BOARD[r][c] for r, c in path) == fw.word


def test_random_boards_properties():
    rng = random.Random(1234)
    letters = "aeioustrnl"
    words = ["".join(rng.choice(letters) for _ in range(rng.randint(3, 5))) for _ in range(400)]
    lex = Lexicon.build(words)
    for _ in range(5):
        board = [[rng.choice(letters) for _ in range(5)] for _ in range(5)]
        result = solve(board, lex)
        for fw in result:
            assert fw.word in lex
            assert set(fw.paths) == _brute_paths(board, fw.word)
        found = set(result.texts)
        for w in set(words):
            if w not in found:
                assert not _brute_paths(board, w)


def test_sort_order():
    result = solve(BOARD, Lexicon.build(WORDS))
    texts = result.texts
    assert texts == sorted(texts, key=lambda w: (-len(w), w))
    assert len(texts[0]) >= len(texts[-1])


def test_deterministic():
    lex = Lexicon.build(WORDS)
    first = solve(BOARD, lex)
    second = solve(BOARD, lex)
    assert first.texts == second.texts
    for a, b in zip(first, second):
        assert a.count == b.count
        assert set(a.paths) == set(b.paths)
    assert first.heatmap() == second.heatmap()


def test_min_word_length():
    board = _filler_board({0: ["c", "a", "t", "s", "x"]})
    lex = Lexicon.build(["ca", "cat", "cats"])
    assert solve(board, lex).texts == ["cats", "cat"]
    assert solve(board, lex, min_word_length=2).texts == ["cats", "cat", "ca"]
    assert solve(board, lex, min_word_length=4).texts == ["cats"]


def test_invalid_min_word_length():
    with pytest.raises(ValueError):
        solve(BOARD, Lexicon.build(WORDS), min_word_length=0)


def test_uppercase_board_accepted():
    upper = [[ch.upper() for ch in row] for row in BOARD]
    lex = Lexicon.build(WORDS)
    assert solve(upper, lex).texts == solve(BOARD, lex).texts


def test_invalid_board_raises_before_search():
    board = [row[:] for row in BOARD]
    board[2][2] = "qu"
    with pytest.raises(InvalidBoard):
        solve(board, Lexicon.build(WORDS))
    with pytest.raises(InvalidBoard):
        solve(BOARD[:4], Lexicon.build(WORDS))


def test_cancelled_solve():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(SolveCancelled):
        solve(BOARD, Lexicon.build(WORDS), cancel=cancel)


def test_unset_cancel_flag_runs_to_completion():
    lex = Lexicon.build(WORDS)
    assert solve(BOARD, lex, cancel=threading.Event()).texts == solve(BOARD, lex).texts


def test_sequence_carried_on_result():
    result = solve(BOARD, Lexicon.build(WORDS), sequence=7)
    assert result.sequence == 7
    assert solve(BOARD, Lexicon.build(WORDS)).sequence is None


def test_lexicon_shared_across_threads():
    lex = Lexicon.build(WORDS)
    expected = solve(BOARD, lex).texts
    results = []

    def worker():
        results.append(solve(BOARD, lex).texts)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [expected] * 4


def test_performance_with_larger_dictionary():
    """Solve a 5x5 board with a few thousand words under 1s."""
    letters = "abcdeilnorstu"
    words = []
    for length in range(3, 6):
        for combo in itertools.islice(itertools.product(letters, repeat=length), 3000):
            words.append("".join(combo))
    lex = Lexicon.build(words)

    board = [
        ["t", "a", "p", "e", "s"],
        ["i", "n", "s", "o", "l"],
        ["e", "d", "r", "l", "a"],
        ["k", "g", "h", "m", "n"],
        ["c", "o", "r", "e", "s"],
    ]

    start = time.perf_counter()
    result = solve(board, lex)
    elapsed = time.perf_counter() - start

    assert elapsed < 1.0, f"Solver took {elapsed:.3f}s (expected <1s)"
    assert len(result) > 0
