"""The duel game: start-up, per-frame logic, saving and the window loop."""

from __future__ import annotations

import argparse
import struct
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple

import pygame

from duelgame.files import read_entire_file, write_entire_file
from duelgame.inputs import GAMEPAD_BUTTON_COUNT, Input, InputState, Key
from duelgame.logs import log
from duelgame.player import (
    IDLE_SPRITE,
    Actions,
    Player,
    PlayerRenderer,
    load_player_sprites,
)

WINDOW_SIZE = (1920, 720)
WINDOW_TITLE = "geam"
MAX_DELTA_TIME = 1.0 / 10
GAME_DATA_FILE = "gameData.data"
BACKGROUND_FILE = Path("assets") / "bg" / "bg2.png"
SPRITES_DIR = Path("assets") / "sprites"
PLAYER_START = (700.0, 350.0)
_GAMEPAD_AXES = 6
_BACKSPACE = "\b"

Rect = Tuple[int, int, int, int]

_GAME_DATA_FORMAT = struct.Struct("<2f")

_SPECIAL_KEYS = {
    pygame.K_SPACE: Key.SPACE,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_LCTRL: Key.LEFT_CTRL,
    pygame.K_TAB: Key.TAB,
    pygame.K_LSHIFT: Key.LEFT_SHIFT,
    pygame.K_LALT: Key.LEFT_ALT,
}


@dataclass
class GameData:
    """Data kept between runs of the game."""

    rect_pos: list = field(default_factory=lambda: [100.0, 100.0])

    def _pack(self) -> bytes:
        return _GAME_DATA_FORMAT.pack(*self.rect_pos)

    @classmethod
    def _unpack(cls, data: bytes) -> GameData:
        if len(data) < _GAME_DATA_FORMAT.size:
            return cls()
        x, y = _GAME_DATA_FORMAT.unpack_from(data)
        return cls(rect_pos=[x, y])


def key_for_event(key: int) -> Optional[Key]:
    """Map a pygame key code to a tracked key, or None if it is not tracked."""
    if pygame.K_a <= key <= pygame.K_z:
        return Key(Key.A + (key - pygame.K_a))
    if pygame.K_0 <= key <= pygame.K_9:
        return Key(Key.NR0 + (key - pygame.K_0))
    return _SPECIAL_KEYS.get(key)


def best_monitor(window_rect: Rect, monitors: Sequence[Rect]) -> Optional[int]:
    """Return the index of the monitor the window overlaps most, or None if none.

    Rectangles are ``(x, y, width, height)``; on a tie the first monitor wins.
    """
    wx, wy, ww, wh = window_rect
    best_overlap = 0
    best: Optional[int] = None
    for index, (mx, my, mw, mh) in enumerate(monitors):
        overlap = max(0, min(wx + ww, mx + mw) - max(wx, mx)) * max(
            0, min(wy + wh, my + mh) - max(wy, my)
        )
        if best_overlap < overlap:
            best_overlap = overlap
            best = index
    return best


class Game:
    """Holds the game's state and runs one frame at a time."""

    def __init__(self, resources_path: str = "resources", surface: Optional[pygame.Surface] = None):
        self.resources = Path(resources_path)
        self.surface = surface
        self.data = GameData()
        self.background: Optional[pygame.Surface] = None
        self.actions = Actions()
        self.player1 = Player()
        self.player2 = Player()
        self.renderer = PlayerRenderer()
        self.full_screen = False

    @property
    def _data_file(self) -> Path:
        return self.resources / GAME_DATA_FILE

    def init(self) -> bool:
        """Load saved data, the background and the fighters' sprites."""
        try:
            self.data = GameData._unpack(read_entire_file(self._data_file))
        except OSError:
            self.data = GameData()

        log("Init, resources path:")
        log(str(self.resources))

        try:
            self.background = pygame.image.load(str(self.resources / BACKGROUND_FILE))
        except (pygame.error, OSError, FileNotFoundError):
            self.background = None

        load_player_sprites(self.player1, str(self.resources / SPRITES_DIR))

        self.player1.state.facing = "right"
        self.player1.attributes.name = "blue"
        self.player1.set_sprite(IDLE_SPRITE)
        self.player1.attributes.position = list(PLAYER_START)
        return True

    def logic(self, delta_time: float, inputs: Input) -> bool:
        """Run and draw one frame; return False to stop the game."""
        if self.surface is None:
            raise RuntimeError("the game has no surface to draw on")
        self.surface.fill((0, 0, 0))
        if self.background is not None:
            self.surface.blit(self.background, (0, 0))

        action = self.actions.check_inputs(inputs, self.player1)
        self.actions.update_state(self.player1, action, delta_time)
        self.renderer.update_player(self.player1, delta_time, self.surface)
        return True

    def close(self) -> None:
        """Save the data kept between runs."""
        write_entire_file(self._data_file, self.data._pack())


def _read_gamepad():
    for index in range(pygame.joystick.get_count()):
        stick = pygame.joystick.Joystick(index)
        buttons = [
            bool(stick.get_button(b)) if b < stick.get_numbuttons() else False
            for b in range(GAMEPAD_BUTTON_COUNT)
        ]
        axes = [
            stick.get_axis(a) if a < stick.get_numaxes() else 0.0
            for a in range(_GAMEPAD_AXES)
        ]
        return buttons, axes
    return None


def _desktop_monitors() -> list[Rect]:
    # Desktops are taken as laid out side by side from the left.
    monitors = []
    x = 0
    for width, height in pygame.display.get_desktop_sizes():
        monitors.append((x, 0, width, height))
        x += width
    return monitors


def _handle_event(event, state: InputState, focus: list) -> bool:
    """Feed one window event into the input state; return False on quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        pressed = event.type == pygame.KEYDOWN
        if pressed and event.key == pygame.K_BACKSPACE:
            state.add_typed(_BACKSPACE)
        key = key_for_event(event.key)
        if key is not None:
            state.set_button_state(key, pressed)
    elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
        pressed = event.type == pygame.MOUSEBUTTONDOWN
        if event.button == 1:
            state.set_left_mouse_state(pressed)
        elif event.button == 3:
            state.set_right_mouse_state(pressed)
    elif event.type == pygame.TEXTINPUT:
        for ch in event.text:
            if ord(ch) < 127:
                state.add_typed(ch)
    elif event.type == pygame.WINDOWFOCUSGAINED:
        focus[0] = True
    elif event.type == pygame.WINDOWFOCUSLOST:
        focus[0] = False
        state.reset_to_zero()
    elif event.type == pygame.WINDOWRESIZED:
        state.reset_to_zero()
    return True


def main(argv=None) -> int:
    """Open the window and run the game until it is closed."""
    parser = argparse.ArgumentParser(prog="duelgame")
    parser.add_argument("--resources", default="resources", help="resources directory")
    args = parser.parse_args(argv)

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    screen = pygame.display.set_mode(WINDOW_SIZE)
    clock = pygame.time.Clock()

    game = Game(args.resources, screen)
    if not game.init():
        pygame.quit()
        return 0

    state = InputState(gamepad_reader=_read_gamepad)
    focus = [True]
    current_full_screen = False
    last_size = WINDOW_SIZE
    running = True
    stop = time.perf_counter()

    try:
        while running:
            start = time.perf_counter()
            delta_time = start - stop
            stop = time.perf_counter()
            augmented = min(delta_time, MAX_DELTA_TIME)

            mouse_x, mouse_y = pygame.mouse.get_pos()
            inputs = state.snapshot(delta_time, focus[0], mouse_x, mouse_y)
            if not game.logic(augmented, inputs):
                break

            if focus[0] and current_full_screen != game.full_screen:
                if game.full_screen:
                    last_size = screen.get_size()
                    display = best_monitor((0, 0, *last_size), _desktop_monitors()) or 0
                    screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN, display=display)
                    current_full_screen = True
                else:
                    screen = pygame.display.set_mode(last_size)
                    current_full_screen = False
                game.surface = screen

            state.update_all(delta_time)
            state.reset_typed()

            pygame.display.flip()
            clock.tick(60)
            for event in pygame.event.get():
                if not _handle_event(event, state, focus):
                    running = False
    finally:
        game.close()
        pygame.quit()
    return 0