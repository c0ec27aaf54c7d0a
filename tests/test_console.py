import numpy as np

from block_blast_solver.game import resolve_piece
from block_blast_solver.tools.solve_rounds import build_parser, main
from block_blast_solver.visualization.console import format_grid, format_piece_sizes


def test_format_grid_marks_highlighted_cells():
    grid = np.zeros((2, 3), dtype=bool)
    grid[0, 0] = True
    grid[1, 2] = True
    assert format_grid(grid, [(1, 2)]) == "[ x . . ]\n[ . . R ]"


def test_format_piece_sizes():
    pieces = [resolve_piece("Dot (1)"), resolve_piece("Horizontal Line (3)")]
    assert format_piece_sizes(pieces) == "[x] and [x,x,x]"


def test_parser_collects_rounds():
    args = build_parser().parse_args(["--round", "40", "40", "Cube (4)", "--round", "1", "2", "3"])
    assert args.rounds == [["40", "40", "Cube (4)"], ["1", "2", "3"]]


def test_main_solves_from_given_board(capsys):
    rows = ["xxxxxxx."] + ["........"] * 7
    code = main(["--round", "40", "40", "40", "--board", *rows, "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Placing Dot (1) at (0,7)" in out
    assert "[ x x x x x x x R ]" in out
    assert "combo: 1" in out


def test_main_reports_game_over(capsys):
    rows = ["xxxxxxxx"] * 7 + ["xxxxxxx."]
    code = main(["--round", "Cube (9)", "Cube (9)", "Cube (9)", "--board", *rows, "--log-level", "WARNING"])
    assert code == 1
    assert "Game Over" in capsys.readouterr().out


def test_list_filters_catalog(capsys):
    assert main(["--list", "--search", "cube"]) == 0
    out = capsys.readouterr().out
    assert "Cube (4)" in out and "Cube (9)" in out
    assert "Dot" not in out
