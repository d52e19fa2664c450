from __future__ import annotations

from typing import Iterable, Optional

import pygame

from falling_blocks.game import FIELD_COLS, FIELD_ROWS, SHAPE_COLORS, SHAPE_OFFSETS, GameSnapshot, GameState, color_for_value
from falling_blocks.game.effects import Particle


class Renderer:
    def __init__(self, cell_size: int = 32, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_w = panel_cells * cell_size
        self._font: Optional[pygame.font.Font] = None

    @property
    def board_size(self) -> tuple[int, int]:
        return FIELD_COLS * self.cell_size, FIELD_ROWS * self.cell_size

    @property
    def window_size(self) -> tuple[int, int]:
        board_w, board_h = self.board_size
        return self.margin * 3 + board_w + self.panel_w, self.margin * 2 + board_h

    def _font_or_default(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + x * self.cell_size,
            self.margin + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snap: GameSnapshot) -> pygame.Surface:
        width, height = self.board_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        h, w = snap.grid.shape
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, color_for_value(int(snap.grid[y, x])), rect)
        return surf

    def _draw_piece(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        if snap.state is GameState.PLAYING:
            for x, y in snap.preview_cells:
                if y >= 0:
                    pygame.draw.rect(screen, snap.current_color, self._cell_rect(x, y), 2)
        for x, y in snap.current_cells:
            if y >= 0:
                pygame.draw.rect(screen, snap.current_color, self._cell_rect(x, y))

    def _draw_panel(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        font = self._font_or_default()
        board_w, _ = self.board_size
        x0 = self.margin * 2 + board_w
        y0 = self.margin
        screen.blit(font.render("Next", True, (230, 230, 230)), (x0, y0))

        offsets = SHAPE_OFFSETS[snap.next_kind]
        min_x = min(dx for dx, _ in offsets)
        min_y = min(dy for _, dy in offsets)
        preview = self.cell_size * 3 // 4
        for dx, dy in offsets:
            rect = pygame.Rect(
                x0 + (dx - min_x) * preview,
                y0 + 30 + (dy - min_y) * preview,
                preview - 1,
                preview - 1,
            )
            pygame.draw.rect(screen, SHAPE_COLORS[snap.next_kind], rect)

        info_lines = [
            f"Score: {snap.score}",
            f"Lines: {snap.lines_cleared_total}",
            f"Pieces: {snap.pieces_placed}",
        ]
        for i, txt in enumerate(info_lines):
            screen.blit(font.render(txt, True, (230, 230, 230)), (x0, y0 + 30 + 5 * preview + i * 24))

    def _draw_particles(self, screen: pygame.Surface, particles: Iterable[Particle]) -> None:
        for p in particles:
            size = int(p.size * p.life)
            if size <= 0:
                continue
            cx = self.margin + int(p.x * self.cell_size)
            cy = self.margin + int(p.y * self.cell_size)
            pygame.draw.circle(screen, p.color, (cx, cy), size)

    def draw(self, screen: pygame.Surface, snap: GameSnapshot, particles: Iterable[Particle] = ()) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(snap), (self.margin, self.margin))
        self._draw_piece(screen, snap)
        self._draw_particles(screen, particles)
        self._draw_panel(screen, snap)
        if snap.state is GameState.GAME_OVER:
            font = self._font_or_default()
            text = font.render("Game Over - R to restart, ESC to quit", True, (255, 100, 100))
            board_w, board_h = self.board_size
            rect = text.get_rect(center=(self.margin + board_w // 2, self.margin + board_h // 2))
            screen.blit(text, rect)
        pygame.display.flip()
