# N x N Tic Tac Toe for two players on one screen.
# - Board size typed in before each game
# - Rules live in game_engine; this module only draws and forwards clicks
# - Light theme, crosses for player 1, circles for player 2
# - Short generated tones for moves, wins and draws
#
# Run: python tic_tac_toe.py [--size N]
# Requires pygame

import argparse
import logging
import math
from array import array
from typing import Optional, Tuple

import pygame

from game_engine import (Cell, GameState, InvalidSize, MoveResult, OutOfBounds, Outcome,
                         apply_move, configure, restart)

logger = logging.getLogger(__name__)

# ====== Configuration / Defaults ======
DEFAULT_WIDTH, DEFAULT_HEIGHT = 900, 700
FPS = 60
DEFAULT_SIZE = 3
MAX_SIZE_DIGITS = 2
# largest board that still leaves a few pixels per cell at the minimum board size
MAX_SIZE = 20

# Labels
LABEL_CREATE = 'Create Board'
LABEL_PLAYING = 'Tap to Play'
LABEL_RESTART = 'Press to Restart'
MSG_INVALID_SIZE = 'Enter valid grid size!'
MSG_DRAW = "It's a Draw!"


def turn_text(player: Cell) -> str:
    return f"Player {int(player)}'s Turn"


def win_text(player: Cell) -> str:
    return f'Player {int(player)} Wins!'


def parse_size(text: str) -> int:
    """Turn the size field's text into a board size, or raise InvalidSize."""
    text = text.strip()
    try:
        size = int(text)
    except ValueError:
        raise InvalidSize(f'not a number: {text!r}') from None
    if size <= 0:
        raise InvalidSize(f'board size must be positive, got {size}')
    if size > MAX_SIZE:
        raise InvalidSize(f'board size must be at most {MAX_SIZE}, got {size}')
    return size


def cell_at(pos: Tuple[int, int], board_rect: pygame.Rect, size: int) -> Optional[Tuple[int, int]]:
    """Map a mouse position to (row, col), or None when it misses the grid."""
    if size <= 0 or not board_rect.collidepoint(pos):
        return None
    cell_w = board_rect.w / size
    cell_h = board_rect.h / size
    col = int((pos[0] - board_rect.x) // cell_w)
    row = int((pos[1] - board_rect.y) // cell_h)
    if 0 <= row < size and 0 <= col < size:
        return row, col
    return None


# ====== Audio helpers ======
def setup_audio():
    # lower latency recommended settings
    try:
        pygame.mixer.pre_init(44100, -16, 2, 512)
    except pygame.error:
        logger.debug('mixer pre_init failed', exc_info=True)


def make_tone(freq=440.0, duration=0.25, volume=0.18, sample_rate=44100):
    """
    Generate a simple sine tone as pygame.Sound.
    If creation fails (no audio device), returns None.
    """
    if not pygame.mixer.get_init():
        return None
    try:
        n = int(sample_rate * duration)
        arr = array('h')
        amp = int(32767 * volume)
        for i in range(n):
            t = float(i) / sample_rate
            v = int(amp * math.sin(2.0 * math.pi * freq * t))
            arr.append(v)
            arr.append(v)  # stereo
        return pygame.mixer.Sound(buffer=arr.tobytes())
    except pygame.error:
        logger.debug('could not build %.0f Hz tone', freq, exc_info=True)
        return None


def play(sound):
    if sound is None:
        return
    try:
        sound.play()
    except pygame.error:
        logger.debug('sound playback failed', exc_info=True)


# ====== Theme Manager ======
class ThemeManager:
    def __init__(self):
        self.primary = pygame.Color('#4a6fa5')  # player 1
        self.secondary = pygame.Color('#ff7e5f')  # player 2
        self.dark_gray = pygame.Color('#495057')

        self.palette = {
            'bg_a': pygame.Color('#f8f9fa'),
            'bg_b': pygame.Color('#e9ecef'),
            'panel': pygame.Color('#ffffff'),
            'line': pygame.Color('#adb5bd'),
            'glow': self.primary,
            'text': self.dark_gray,
            'input_border': pygame.Color('#ced4da'),
            'input_locked': pygame.Color('#e9ecef'),
        }

    def theme(self):
        return self.palette

    def mark_color(self, player: Cell) -> pygame.Color:
        return self.primary if player == Cell.PLAYER1 else self.secondary


# ====== Simple UI Button ======
class Button:
    def __init__(self, rect: pygame.Rect, text: str, font: pygame.font.Font,
                 color_a: pygame.Color, color_b: pygame.Color, radius=14, callback=None):
        self.rect = rect
        self.text = text
        self.font = font
        self.color_a = color_a
        self.color_b = color_b
        self.radius = radius
        self.callback = callback
        self.hover = False
        self.active = True

    def draw(self, surf):
        if not self.active:
            # dimmed
            base = pygame.Surface((self.rect.w, self.rect.h), pygame.SRCALPHA)
            pygame.draw.rect(base, (200, 200, 200, 200), base.get_rect(), border_radius=self.radius)
            surf.blit(base, self.rect.topleft)
            txt = self.font.render(self.text, True, (160, 160, 160))
            surf.blit(txt, (self.rect.x + (self.rect.w - txt.get_width()) // 2,
                            self.rect.y + (self.rect.h - txt.get_height()) // 2))
            return

        tmp = pygame.Surface((self.rect.w, self.rect.h), pygame.SRCALPHA)
        for y in range(self.rect.h):
            t = y / max(1, self.rect.h - 1)
            pygame.draw.line(tmp, self.color_a.lerp(self.color_b, t), (0, y), (self.rect.w, y))
        mask = pygame.Surface((self.rect.w, self.rect.h), pygame.SRCALPHA)
        pygame.draw.rect(mask, (255, 255, 255), mask.get_rect(), border_radius=self.radius)
        tmp.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)

        shadow = pygame.Surface((self.rect.w, self.rect.h), pygame.SRCALPHA)
        pygame.draw.rect(shadow, (0, 0, 0, 30), shadow.get_rect(), border_radius=self.radius)
        surf.blit(shadow, (self.rect.x + 2, self.rect.y + 3))

        if self.hover:
            highlight = pygame.Surface((self.rect.w, self.rect.h), pygame.SRCALPHA)
            pygame.draw.rect(highlight, (255, 255, 255, 40), highlight.get_rect(), border_radius=self.radius)
            tmp.blit(highlight, (0, 0), special_flags=pygame.BLEND_RGBA_ADD)

        surf.blit(tmp, self.rect.topleft)
        txt = self.font.render(self.text, True, (255, 255, 255))
        surf.blit(txt, (self.rect.x + (self.rect.w - txt.get_width()) // 2,
                        self.rect.y + (self.rect.h - txt.get_height()) // 2))

    def handle_event(self, event):
        if not self.active:
            self.hover = False
            return False
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.callback:
                    self.callback()
                return True
        return False


# ====== Size Input ======
class SizeInput:
    def __init__(self, rect: pygame.Rect, font: pygame.font.Font, text=''):
        self.rect = rect
        self.font = font
        self.text = text
        self.locked = False

    def handle_event(self, event):
        if self.locked or event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif event.unicode.isdigit() and len(self.text) < MAX_SIZE_DIGITS:
            self.text += event.unicode

    def draw(self, surf, theme: dict):
        fill = theme['input_locked'] if self.locked else theme['panel']
        pygame.draw.rect(surf, fill, self.rect, border_radius=10)
        pygame.draw.rect(surf, theme['input_border'], self.rect, width=2, border_radius=10)
        shown = self.text if self.text else 'N'
        color = theme['text'] if self.text else theme['line']
        txt = self.font.render(shown, True, color)
        surf.blit(txt, (self.rect.x + (self.rect.w - txt.get_width()) // 2,
                        self.rect.y + (self.rect.h - txt.get_height()) // 2))


# ====== Controller ======
class GameController:
    """
    Owns the current GameState and the control labels derived from it.

    Holds no pygame objects, so the window can be rebuilt around it and the
    transitions can be exercised without a display.
    """

    def __init__(self):
        self.state: Optional[GameState] = None
        self.status_text = ''
        self.button_text = LABEL_CREATE
        self.button_enabled = True
        self.input_locked = False

    @property
    def playing(self) -> bool:
        return self.state is not None and not self.state.status.is_terminal

    def confirm_size(self, text: str) -> bool:
        try:
            size = parse_size(text)
            if self.state is not None and self.state.size == size:
                state = restart(self.state)
            else:
                state = configure(size)
        except InvalidSize as e:
            logger.info('rejected board size: %s', e)
            self.status_text = MSG_INVALID_SIZE
            return False
        self.state = state
        self.status_text = turn_text(state.current_player)
        self.button_text = LABEL_PLAYING
        self.button_enabled = False
        self.input_locked = True
        return True

    def tap(self, row: int, col: int) -> Optional[MoveResult]:
        if self.state is None:
            return None
        try:
            result = apply_move(self.state, row, col)
        except OutOfBounds:
            logger.error('click mapped outside the board: (%d, %d)', row, col)
            return None

        if result.outcome == Outcome.CONTINUED:
            self.status_text = turn_text(self.state.current_player)
        elif result.outcome in (Outcome.WON, Outcome.DRAW):
            self.status_text = win_text(result.player) if result.outcome == Outcome.WON else MSG_DRAW
            self.button_text = LABEL_RESTART
            self.button_enabled = True
            self.input_locked = False
        return result


# ====== Board View ======
class BoardView:
    def __init__(self, theme_mgr: ThemeManager):
        self.theme_mgr = theme_mgr

    def draw(self, surf, board_rect: pygame.Rect, state: GameState, mouse_pos, interactive: bool):
        theme = self.theme_mgr.theme()
        n = state.size
        cell = board_rect.w / n

        board_shadow = pygame.Surface((board_rect.w + 10, board_rect.h + 10), pygame.SRCALPHA)
        pygame.draw.rect(board_shadow, (0, 0, 0, 40), board_shadow.get_rect(), border_radius=20)
        surf.blit(board_shadow, (board_rect.x - 5, board_rect.y - 5))
        pygame.draw.rect(surf, theme['panel'], board_rect, border_radius=16)

        # thinner lines as the grid gets denser
        line_width = max(2, min(6, int(cell // 16)))
        for i in range(1, n):
            offset = int(i * cell)
            pygame.draw.line(surf, theme['line'], (board_rect.x + 10, board_rect.y + offset),
                             (board_rect.right - 10, board_rect.y + offset), line_width)
            pygame.draw.line(surf, theme['line'], (board_rect.x + offset, board_rect.y + 10),
                             (board_rect.x + offset, board_rect.bottom - 10), line_width)

        hovered = cell_at(mouse_pos, board_rect, n) if interactive else None
        pad = min(max(1, int(cell * 0.18)), int(cell) // 3)
        stroke = max(2, int(cell * 0.08))
        for r, row in enumerate(state.board.rows()):
            for c, mark in enumerate(row):
                inner = pygame.Rect(int(board_rect.x + c * cell) + pad, int(board_rect.y + r * cell) + pad,
                                    int(cell) - 2 * pad, int(cell) - 2 * pad)
                if inner.w <= 0 or inner.h <= 0:
                    continue
                if mark == Cell.PLAYER1:
                    self._draw_cross(surf, inner, stroke)
                elif mark == Cell.PLAYER2:
                    self._draw_circle(surf, inner, stroke)
                elif hovered == (r, c):
                    highlight = pygame.Surface((inner.w, inner.h), pygame.SRCALPHA)
                    pygame.draw.rect(highlight, (*theme['glow'][:3], 30), highlight.get_rect(), border_radius=10)
                    surf.blit(highlight, inner.topleft)

    def _draw_cross(self, surf, rect: pygame.Rect, stroke: int):
        color = self.theme_mgr.mark_color(Cell.PLAYER1)
        pygame.draw.line(surf, color, rect.topleft, rect.bottomright, stroke)
        pygame.draw.line(surf, color, rect.bottomleft, rect.topright, stroke)

    def _draw_circle(self, surf, rect: pygame.Rect, stroke: int):
        color = self.theme_mgr.mark_color(Cell.PLAYER2)
        pygame.draw.circle(surf, color, rect.center, min(rect.w, rect.h) // 2, stroke)


# ====== Main Game ======
class Game:
    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT, size: Optional[int] = None):
        setup_audio()
        pygame.init()
        try:
            pygame.mixer.init()
        except pygame.error:
            logger.warning('no audio device, sounds disabled')
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption('Tic Tac Toe - N x N')
        self.clock = pygame.time.Clock()
        self.running = True

        # Fonts
        self.font_title = pygame.font.SysFont('Segoe UI', 46, bold=True)
        self.font_sub = pygame.font.SysFont('Segoe UI', 22)
        self.font_button = pygame.font.SysFont('Segoe UI', 22, bold=True)

        self.theme_mgr = ThemeManager()
        self.board_view = BoardView(self.theme_mgr)
        self.controller = GameController()

        # sounds
        self.snd_place = make_tone(680, 0.06, 0.13)
        self.snd_win = make_tone(440, 0.35, 0.18)
        self.snd_draw = make_tone(250, 0.30, 0.15)

        self.size_input = SizeInput(pygame.Rect(0, 0, 90, 46), self.font_button,
                                    text=str(size if size is not None else DEFAULT_SIZE))
        self.btn_start = Button(pygame.Rect(0, 0, 200, 46), LABEL_CREATE, self.font_button,
                                pygame.Color('#4a6fa5'), pygame.Color('#6b5b95'), radius=14,
                                callback=self.start_game)

        if size is not None:
            self.start_game()

    def start_game(self):
        self.controller.confirm_size(self.size_input.text)
        self.sync_controls()

    def sync_controls(self):
        self.btn_start.text = self.controller.button_text
        self.btn_start.active = self.controller.button_enabled
        self.size_input.locked = self.controller.input_locked

    def compute_layout(self) -> pygame.Rect:
        w, h = self.screen.get_size()

        # controls row under the title
        total = self.size_input.rect.w + 20 + self.btn_start.rect.w
        start_x = (w - total) // 2
        self.size_input.rect.topleft = (start_x, 100)
        self.btn_start.rect.topleft = (start_x + self.size_input.rect.w + 20, 100)

        board_size = max(120, int(min(w * 0.8, h - 260, 600)))
        board_left = (w - board_size) // 2
        return pygame.Rect(board_left, 200, board_size, board_size)

    def handle_click_board(self, mouse_pos, board_rect: pygame.Rect):
        if not self.controller.playing:
            return
        hit = cell_at(mouse_pos, board_rect, self.controller.state.size)
        if hit is None:
            return
        result = self.controller.tap(*hit)
        if result is None or result.outcome == Outcome.IGNORED:
            return
        if result.outcome == Outcome.WON:
            play(self.snd_win)
        elif result.outcome == Outcome.DRAW:
            play(self.snd_draw)
        else:
            play(self.snd_place)
        self.sync_controls()

    def draw_background(self):
        th = self.theme_mgr.theme()
        w, h = self.screen.get_size()
        for y in range(h):
            t = y / max(1, h - 1)
            pygame.draw.line(self.screen, th['bg_a'].lerp(th['bg_b'], t), (0, y), (w, y))

    def draw_title(self):
        w, _ = self.screen.get_size()
        title_surf = self.font_title.render('Tic Tac Toe', True, self.theme_mgr.primary)
        shadow_surf = self.font_title.render('Tic Tac Toe', True, (0, 0, 0, 30))
        x = (w - title_surf.get_width()) // 2
        self.screen.blit(shadow_surf, (x + 2, 32))
        self.screen.blit(title_surf, (x, 30))

    def draw_status(self):
        if not self.controller.status_text:
            return
        w, _ = self.screen.get_size()
        state = self.controller.state
        color = self.theme_mgr.dark_gray
        if state is not None and state.winner is not None:
            color = self.theme_mgr.mark_color(state.winner)
        surf = self.font_sub.render(self.controller.status_text, True, color)
        self.screen.blit(surf, ((w - surf.get_width()) // 2, 160))

    def run(self):
        while self.running:
            self.clock.tick(FPS)
            mouse_pos = pygame.mouse.get_pos()
            board_rect = self.compute_layout()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self.running = False
                    elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER) and self.btn_start.active:
                        self.start_game()
                    else:
                        self.size_input.handle_event(event)

                clicked = self.btn_start.handle_event(event)
                if not clicked and event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click_board(event.pos, board_rect)

            self.draw_background()
            self.draw_title()
            self.size_input.draw(self.screen, self.theme_mgr.theme())
            self.btn_start.draw(self.screen)
            self.draw_status()
            if self.controller.state is not None:
                self.board_view.draw(self.screen, board_rect, self.controller.state, mouse_pos,
                                     self.controller.playing)

            pygame.display.flip()

        pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description='Two-player N x N Tic Tac Toe')
    ap.add_argument('--size', type=int, help='start straight away on a SIZE x SIZE board')
    ap.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='window width (default %(default)s)')
    ap.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='window height (default %(default)s)')
    ap.add_argument('--log-level', default='WARNING',
                    choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='logging verbosity')
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')
    g = Game(args.width, args.height, size=args.size)
    g.run()


if __name__ == '__main__':
    main()
