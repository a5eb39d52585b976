"""
Solve a board from the command line.

Usage:
    python -m scripts.solve_board <board> [--dictionary PATH] [--min-length N]

Examples:
    python -m scripts.solve_board "catxx/sxxxx/xxxxx/xxxxx/xxxxx"
    python -m scripts.solve_board c,a,t,x,x,s,x,x,x,x,... --mode count --heatmap
    python -m scripts.solve_board eeeeeeeeeeeeeeeeeeeeeeeee --dictionary words.txt --limit 20

This will:
  1. Parse and validate the 25-letter board
  2. Build the lexicon from the dictionary file
  3. Print the ranked words with their paths (or counts)
  4. Optionally print the per-cell usage heatmap (--heatmap)
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgrid.settings import settings
from wordgrid.board import format_board, parse_board
from wordgrid.dictionary import load_lexicon
from wordgrid.errors import EmptyLexicon, InvalidBoard
from wordgrid.metrics import StageTimer
from wordgrid.results import DISPLAY_MODES
from wordgrid.solver import solve


def main():
    parser = argparse.ArgumentParser(description="Word Grid Solver")
    parser.add_argument("board", help="25 letters, run together or separated by commas, slashes or spaces")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Newline-separated word list (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Minimum reported word length (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--mode", choices=DISPLAY_MODES, default=settings.RANK_DISPLAY_MODE,
                        help="Show every path per word, or a count plus one path")
    parser.add_argument("--limit", type=int, default=settings.MAX_RESULTS,
                        help="Only print the top N words (0 = all)")
    parser.add_argument("--heatmap", action="store_true",
                        help="Print how many word paths pass through each cell")
    args = parser.parse_args()

    try:
        board = parse_board(args.board)
    except InvalidBoard as e:
        print(f"Error: {e}")
        sys.exit(1)

    dict_path = Path(args.dictionary)
    if not dict_path.exists():
        print(f"Error: {dict_path} does not exist")
        sys.exit(1)

    timer = StageTimer()
    try:
        with timer.stage("lexicon"):
            lexicon = load_lexicon(dict_path)
    except EmptyLexicon as e:
        print(f"Error: {e}")
        sys.exit(1)

    with timer.stage("solve") as counts:
        result = solve(board, lexicon, args.min_length)
        counts["words"] = len(result)
        counts["paths"] = result.path_count

    print(format_board(board))
    print(f"\nDictionary: {dict_path} ({len(lexicon)} words)")
    print(f"Found {len(result)} words ({result.path_count} paths) in {timer.timings['solve']:.1f}ms\n")

    shown = result.words[:args.limit] if args.limit > 0 else result.words
    width = max((len(fw.word) for fw in shown), default=0)
    for fw in shown:
        if args.mode == "count":
            print(f"  {fw.word:<{width}}  x{fw.count}  {_format_path(fw.path)}")
        else:
            print(f"  {fw.word:<{width}}  x{fw.count}")
            for path in fw.paths:
                print(f"      {_format_path(path)}")

    if args.heatmap:
        grid = result.usage_grid()
        print(f"\nHeatmap (max usage {result.max_usage()}):")
        for r in range(grid.shape[0]):
            print("  " + " ".join(f"{int(v):>4}" for v in grid[r]))


def _format_path(path) -> str:
    return "-".join(f"({r},{c})" for r, c in path)


if __name__ == "__main__":
    main()
