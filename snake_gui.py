from __future__ import annotations
import argparse
import pygame as pg

from retrodesk.snake import SnakeGame, GRID_EXTENT, TICK_MS, RUNNING, OVER
from retrodesk.snapshot import snake_view, BODY, HEAD, FOOD
from retrodesk.ticker import Ticker, ManualScheduler


BLACK = (17, 17, 17)
GRID_LINE = (34, 34, 34)
GREEN = (0, 221, 0)
HEAD_GREEN = (0, 255, 0)
FOOD_GREEN = (34, 204, 34)
TEXT = (0, 200, 0)
BUTTON = (0, 120, 0)

KEY_DIRECTIONS = {
    pg.K_UP: 'up', pg.K_w: 'up',
    pg.K_DOWN: 'down', pg.K_s: 'down',
    pg.K_LEFT: 'left', pg.K_a: 'left',
    pg.K_RIGHT: 'right', pg.K_d: 'right',
}


class SnakeGUI:
    def __init__(self, cell: int = 20, tick_ms: int = TICK_MS, seed: int | None = None):
        pg.init()
        self.font = pg.font.SysFont('Courier,monospace', 18, bold=True)
        self.font_lg = pg.font.SysFont('Courier,monospace', 28, bold=True)
        self.cell = cell
        self.board_px = GRID_EXTENT * cell
        self.header = 36
        self.footer = 110
        self.screen = pg.display.set_mode((self.board_px, self.header + self.board_px + self.footer))
        pg.display.set_caption('Snake')

        self.game = SnakeGame(GRID_EXTENT, seed=seed)
        self.game.add_listener(self.on_game_event)
        self.scheduler = ManualScheduler()
        self.ticker = Ticker(self.scheduler.after, self.scheduler.after_cancel, tick_ms, self.game.tick)
        self.buttons = self._layout_buttons()
        self.clock = pg.time.Clock()

    def _layout_buttons(self):
        size = 32
        cx = self.board_px // 2
        top = self.header + self.board_px + 8
        return {
            'up': pg.Rect(cx - size // 2, top, size, size),
            'left': pg.Rect(cx - size // 2 - size - 4, top + size + 4, size, size),
            'down': pg.Rect(cx - size // 2, top + size + 4, size, size),
            'right': pg.Rect(cx + size // 2 + 4, top + size + 4, size, size),
        }

    # ---------- Logic ----------
    def start(self):
        self.ticker.stop()
        self.game.start()
        self.ticker.start()

    def on_game_event(self, event, game):
        if event == 'die':
            self.ticker.stop()
            print(f'[snake] Game over | score: {game.score} | high score: {game.high_score}')

    def handle_click(self, pos):
        for direction, rect in self.buttons.items():
            if rect.collidepoint(pos):
                self.game.request_direction(direction)
                return
        if self.game.status != RUNNING:
            self.start()

    # ---------- Rendering ----------
    def draw_board(self):
        oy = self.header
        view = snake_view(self.game)
        for y in range(GRID_EXTENT):
            for x in range(GRID_EXTENT):
                code = view[y, x]
                rect = pg.Rect(x * self.cell, oy + y * self.cell, self.cell, self.cell)
                if code == FOOD:
                    pg.draw.rect(self.screen, FOOD_GREEN, rect)
                elif code in (BODY, HEAD):
                    outer = HEAD_GREEN if code == HEAD else GREEN
                    pg.draw.rect(self.screen, outer, rect)
                    pg.draw.rect(self.screen, tuple(int(v * 0.85) for v in outer), rect.inflate(-4, -4))
                pg.draw.rect(self.screen, GRID_LINE, rect, 1)

    def draw_overlay(self, title: str, subtitle: str):
        shade = pg.Surface((self.board_px, self.board_px), pg.SRCALPHA)
        shade.fill((0, 0, 0, 200))
        self.screen.blit(shade, (0, self.header))
        center = (self.board_px // 2, self.header + self.board_px // 2)
        t = self.font_lg.render(title, True, TEXT)
        self.screen.blit(t, t.get_rect(center=(center[0], center[1] - 20)))
        s = self.font.render(subtitle, True, TEXT)
        self.screen.blit(s, s.get_rect(center=(center[0], center[1] + 20)))

    def render(self):
        self.screen.fill(BLACK)
        g = self.game
        hdr = self.font.render(f'SCORE: {g.score}  HI-SCORE: {g.high_score}', True, TEXT)
        self.screen.blit(hdr, (8, 8))
        self.draw_board()
        if g.status == OVER:
            self.draw_overlay('GAME OVER', f'SCORE: {g.score}  -  click or Enter')
        elif g.status != RUNNING:
            self.draw_overlay('SNAKE GAME', 'click or Enter to start')
        arrows = {'up': '^', 'down': 'v', 'left': '<', 'right': '>'}
        for direction, rect in self.buttons.items():
            pg.draw.rect(self.screen, BUTTON, rect, border_radius=4)
            a = self.font.render(arrows[direction], True, BLACK)
            self.screen.blit(a, a.get_rect(center=rect.center))

    def run(self):
        running = True
        while running:
            for event in pg.event.get():
                if event.type == pg.QUIT:
                    running = False
                elif event.type == pg.KEYDOWN:
                    if event.key in KEY_DIRECTIONS:
                        self.game.request_direction(KEY_DIRECTIONS[event.key])
                    elif event.key in (pg.K_RETURN, pg.K_SPACE) and self.game.status != RUNNING:
                        self.start()
                    elif event.key == pg.K_ESCAPE:
                        running = False
                elif event.type == pg.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.scheduler.advance_to(pg.time.get_ticks())
            self.render()
            pg.display.flip()
            self.clock.tick(60)
        self.ticker.stop()
        pg.quit()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--cell', type=int, default=20, help='Cell size in pixels')
    parser.add_argument('--tick_ms', type=int, default=TICK_MS)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    args = parser.parse_args()
    gui = SnakeGUI(cell=args.cell, tick_ms=args.tick_ms, seed=(None if args.seed < 0 else args.seed))
    gui.run()


if __name__ == '__main__':
    main()
