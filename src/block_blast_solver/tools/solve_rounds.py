from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from block_blast_solver.game import (
    PIECE_CATALOG,
    BlockBlastGame,
    ComboState,
    GameGrid,
    Piece,
    resolve_piece,
    search_pieces,
)
from block_blast_solver.visualization.console import FramePrinter, print_piece


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solve Block Blast rounds and print the placements.")
    p.add_argument("--round", dest="rounds", nargs=3, action="append", metavar="PIECE", default=[],
                   help="Three pieces (catalog index or name); repeat for several rounds")
    p.add_argument("--board", nargs=8, metavar="ROW", default=None,
                   help="Starting board as 8 rows of 8 cells, 'x' occupied and '.' empty")
    p.add_argument("--combo", type=int, default=0, help="Starting combo count")
    p.add_argument("--since-clear", type=int, default=0, help="Pieces placed since the last clear")
    p.add_argument("--list", action="store_true", help="List catalog pieces and exit")
    p.add_argument("--search", type=str, default="", help="Filter --list by piece name")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING"], default="INFO")
    return p


def list_pieces(query: str) -> None:
    for piece in search_pieces(query):
        print(f"{PIECE_CATALOG.index(piece):3d}  {piece.name}")
        print_piece(piece)


def parse_rounds(parser: argparse.ArgumentParser, rounds: Sequence[Sequence[str]]) -> List[List[Piece]]:
    parsed: List[List[Piece]] = []
    for tokens in rounds:
        try:
            parsed.append([resolve_piece(t) for t in tokens])
        except KeyError as exc:
            parser.error(str(exc.args[0]))
    return parsed


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(name)s %(message)s")

    if args.list:
        list_pieces(args.search)
        return 0
    if not args.rounds:
        parser.error("at least one --round is required")
    if args.combo < 0 or args.since_clear < 0:
        parser.error("combo counters must be non-negative")

    rounds = parse_rounds(parser, args.rounds)
    grid = GameGrid()
    if args.board:
        try:
            grid = GameGrid.from_rows(args.board)
        except ValueError as exc:
            parser.error(str(exc))

    game = BlockBlastGame(grid=grid)
    game.combo = ComboState(args.combo, args.since_clear)
    printer = FramePrinter()
    for pieces in rounds:
        printer.selection(game.grid.clone_state(), pieces)
        result = game.play_round(pieces)
        if not result.solved:
            print("No valid arrangement found. Game Over!")
            return 1
        assert result.trace is not None
        printer.trace(result.trace)

    print(f"\nRounds: {game.rounds_played}  lines: {game.total_lines_cleared}  combo: {game.combo.combo_count}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
