from __future__ import annotations

import logging
from typing import List, Set, Tuple

import pygame

from block_blast_solver.game import BOARD_COLS, BOARD_ROWS, BlockBlastGame, Piece, search_pieces
from block_blast_solver.visualization.console import FramePrinter
from block_blast_solver.visualization.renderer import board_cell_at, draw_board, draw_piece


CELL_SIZE = 40
ICON_CELL = 12
MARGIN = 20
LIST_ROW_H = 5 * ICON_CELL
PANEL_W = 320


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")
    pygame.init()
    try:
        game = BlockBlastGame()
        printer = FramePrinter()
        board_px = BOARD_ROWS * CELL_SIZE
        width = MARGIN * 3 + BOARD_COLS * CELL_SIZE + PANEL_W
        height = MARGIN * 2 + board_px + 160
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Block Blast Solver (8x8)")
        font = pygame.font.SysFont(None, 22)

        query = ""
        scroll = 0
        selected: List[Piece] = []
        edit_mode = False
        last_cells: Set[Tuple[int, int]] = set()
        status = "Pick 3 pieces, Enter to solve"

        running = True
        clock = pygame.time.Clock()
        while running:
            matches = search_pieces(query)
            x_list = MARGIN * 2 + BOARD_COLS * CELL_SIZE
            y_list = MARGIN + 30
            visible = max(1, (height - y_list - MARGIN) // LIST_ROW_H)
            scroll = max(0, min(scroll, max(0, len(matches) - visible)))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_RETURN:
                        if game.game_over:
                            status = "Game over - F5 to reset"
                        elif len(selected) != game.config.pieces_per_round:
                            status = f"Select {game.config.pieces_per_round} pieces first"
                        else:
                            printer.selection(game.grid.clone_state(), selected)
                            result = game.play_round(selected)
                            if result.solved and result.trace is not None:
                                printer.trace(result.trace)
                                last_cells = {
                                    cell for step in result.trace.steps
                                    for cell in step.placement.piece.cells_at(step.placement.row, step.placement.col)
                                    if game.grid.grid[cell]
                                }
                                status = f"Cleared {result.trace.total_lines} line(s), combo {game.combo.combo_count}"
                            else:
                                status = "No valid arrangement found. Game Over!"
                            selected = []
                    elif event.key == pygame.K_F2:
                        edit_mode = not edit_mode
                        status = f"Edit mode is now: {edit_mode}"
                    elif event.key == pygame.K_F3:
                        if selected:
                            selected.pop()
                    elif event.key == pygame.K_F5:
                        game.reset()
                        selected = []
                        last_cells = set()
                        status = "Board reset"
                    elif event.key == pygame.K_BACKSPACE:
                        query = query[:-1]
                        scroll = 0
                    elif event.unicode and event.unicode.isprintable():
                        query += event.unicode
                        scroll = 0
                elif event.type == pygame.MOUSEWHEEL:
                    scroll -= event.y
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    cell = board_cell_at(event.pos, CELL_SIZE, MARGIN, BOARD_ROWS, BOARD_COLS)
                    if cell is not None:
                        if edit_mode:
                            game.grid.toggle(*cell)
                            last_cells.discard(cell)
                    elif event.pos[0] >= x_list and event.pos[1] >= y_list:
                        idx = scroll + (event.pos[1] - y_list) // LIST_ROW_H
                        if idx < len(matches) and len(selected) < game.config.pieces_per_round:
                            selected.append(matches[idx])

            # Draw
            screen.fill((15, 15, 20))
            draw_board(screen, game.grid.grid, CELL_SIZE, MARGIN, last_cells)
            search_txt = font.render(f"Search: {query}_", True, (230, 230, 230))
            screen.blit(search_txt, (x_list, MARGIN))
            for i, piece in enumerate(matches[scroll:scroll + visible]):
                y = y_list + i * LIST_ROW_H
                draw_piece(screen, piece, x_list, y, ICON_CELL)
                label = font.render(piece.name, True, (200, 200, 200))
                screen.blit(label, (x_list + 6 * ICON_CELL, y + 4))

            y_info = MARGIN * 2 + board_px
            x_sel = MARGIN
            for piece in selected:
                bounds = draw_piece(screen, piece, x_sel, y_info, ICON_CELL, (120, 220, 140))
                x_sel += bounds.width + ICON_CELL
            info_lines = [
                status,
                f"Combo: {game.combo.combo_count}  since clear: {game.combo.pieces_since_last_clear}"
                f"  edit: {'on' if edit_mode else 'off'}",
                "Click list: select   F3: unselect last   Enter: solve",
                "F2: edit mode (click cells)   F5: reset   Esc: quit",
            ]
            for i, txt in enumerate(info_lines):
                img = font.render(txt, True, (255, 100, 100) if game.game_over and i == 0 else (230, 230, 230))
                screen.blit(img, (MARGIN, y_info + 5 * ICON_CELL + i * 18))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
