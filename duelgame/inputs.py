"""Keyboard, mouse and gamepad button state with press, release and typed tracking."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field, fields
from typing import Callable, Optional, Sequence, Tuple

from duelgame.text import strlcpy

TYPED_FIRST_DELAY = 0.48
TYPED_REPEAT_DELAY = 0.07
TYPED_INPUT_SIZE = 20

GamepadReading = Tuple[Sequence[bool], Sequence[float]]


class Key(enum.IntEnum):
    """Keyboard buttons tracked by the input layer."""

    A = 0
    B = enum.auto()
    C = enum.auto()
    D = enum.auto()
    E = enum.auto()
    F = enum.auto()
    G = enum.auto()
    H = enum.auto()
    I = enum.auto()  # noqa: E741
    J = enum.auto()
    K = enum.auto()
    L = enum.auto()
    M = enum.auto()
    N = enum.auto()
    O = enum.auto()  # noqa: E741
    P = enum.auto()
    Q = enum.auto()
    R = enum.auto()
    S = enum.auto()
    T = enum.auto()
    U = enum.auto()
    V = enum.auto()
    W = enum.auto()
    X = enum.auto()
    Y = enum.auto()
    Z = enum.auto()
    NR0 = enum.auto()
    NR1 = enum.auto()
    NR2 = enum.auto()
    NR3 = enum.auto()
    NR4 = enum.auto()
    NR5 = enum.auto()
    NR6 = enum.auto()
    NR7 = enum.auto()
    NR8 = enum.auto()
    NR9 = enum.auto()
    SPACE = enum.auto()
    ENTER = enum.auto()
    ESCAPE = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    LEFT_CTRL = enum.auto()
    TAB = enum.auto()
    LEFT_SHIFT = enum.auto()
    LEFT_ALT = enum.auto()


BUTTONS_COUNT = len(Key)


class ControllerButton(enum.IntEnum):
    """Gamepad buttons, numbered in the standard gamepad layout."""

    A = 0
    B = 1
    X = 2
    Y = 3
    LEFT_BUMPER = 4
    RIGHT_BUMPER = 5
    BACK = 6
    START = 7
    GUIDE = 8
    LEFT_THUMB = 9
    RIGHT_THUMB = 10
    UP = 11
    RIGHT = 12
    DOWN = 13
    LEFT = 14


GAMEPAD_BUTTON_COUNT = len(ControllerButton)

# Axis order of a gamepad reading.
_AXIS_LEFT_X = 0
_AXIS_LEFT_Y = 1
_AXIS_RIGHT_X = 2
_AXIS_RIGHT_Y = 3
_AXIS_LEFT_TRIGGER = 4
_AXIS_RIGHT_TRIGGER = 5


@dataclass
class Button:
    """State of one button for the current frame."""

    pressed: bool = False
    held: bool = False
    released: bool = False
    new_state: int = -1
    typed: bool = False
    typed_time: float = 0.0

    def merge(self, other: Button) -> None:
        """Combine the pressed, released and held flags of ``other`` into this one."""
        self.pressed = self.pressed or other.pressed
        self.released = self.released or other.released
        self.held = self.held or other.held

    def reset(self) -> None:
        """Clear the pressed, held and released flags."""
        self.pressed = False
        self.held = False
        self.released = False

    def process_event(self, new_state: bool) -> None:
        """Record a press (true) or release (false) to apply on the next update."""
        self.new_state = 1 if new_state else 0

    def update(self, delta_time: float) -> None:
        """Advance the button by one frame, applying any pending event."""
        if self.new_state == 1:
            self.pressed = not self.held
            self.held = True
            self.released = False
        elif self.new_state == 0:
            self.held = False
            self.pressed = False
            self.released = True
        else:
            self.pressed = False
            self.released = False

        if self.pressed:
            self.typed = True
            self.typed_time = TYPED_FIRST_DELAY
        elif self.held:
            self.typed_time -= delta_time
            if self.typed_time < 0.0:
                self.typed_time += TYPED_REPEAT_DELAY
                self.typed = True
            else:
                self.typed = False
        else:
            self.typed_time = 0.0
            self.typed = False

        self.new_state = -1


def _button_list(count: int) -> list[Button]:
    return [Button() for _ in range(count)]


@dataclass
class Stick:
    """Position of an analog stick."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Controller:
    """Gamepad buttons, triggers and sticks."""

    buttons: list[Button] = field(default_factory=lambda: _button_list(GAMEPAD_BUTTON_COUNT))
    lt: float = 0.0
    rt: float = 0.0
    l_stick: Stick = field(default_factory=Stick)
    r_stick: Stick = field(default_factory=Stick)

    def reset(self) -> None:
        """Return every button, trigger and stick to rest."""
        fresh = Controller()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))


@dataclass
class Input:
    """Snapshot of all input handed to the game for one frame."""

    l_mouse: Button = field(default_factory=Button)
    r_mouse: Button = field(default_factory=Button)
    mouse_x: int = 0
    mouse_y: int = 0
    buttons: list[Button] = field(default_factory=lambda: _button_list(BUTTONS_COUNT))
    typed_input: str = ""
    delta_time: float = 0.0
    has_focus: bool = False
    controller: Controller = field(default_factory=Controller)

    def is_button_held(self, key: int) -> bool:
        """Tell whether ``key`` is held down."""
        return self.buttons[Key(key)].held

    def is_button_pressed(self, key: int) -> bool:
        """Tell whether ``key`` went down this frame."""
        return self.buttons[Key(key)].pressed

    def is_button_released(self, key: int) -> bool:
        """Tell whether ``key`` went up this frame."""
        return self.buttons[Key(key)].released

    def is_button_typed(self, key: int) -> bool:
        """Tell whether ``key`` produced a typed repeat this frame."""
        return self.buttons[Key(key)].typed


def _in_range(key: int) -> bool:
    return 0 <= key < BUTTONS_COUNT


@dataclass
class InputState:
    """Live input state fed by window events and advanced once per frame.

    ``gamepad_reader`` is called on each update; it returns ``None`` when no
    gamepad is present, or a pair of button states and six axis values in the
    order left x, left y, right x, right y, left trigger, right trigger.
    """

    keyboard: list[Button] = field(default_factory=lambda: _button_list(BUTTONS_COUNT))
    left_mouse: Button = field(default_factory=Button)
    right_mouse: Button = field(default_factory=Button)
    controller: Controller = field(default_factory=Controller)
    typed_input: str = ""
    gamepad_reader: Optional[Callable[[], Optional[GamepadReading]]] = None

    def set_button_state(self, button: int, new_state: bool) -> None:
        """Queue a press or release of a keyboard button."""
        self.keyboard[Key(button)].process_event(new_state)

    def set_left_mouse_state(self, new_state: bool) -> None:
        """Queue a press or release of the left mouse button."""
        self.left_mouse.process_event(new_state)

    def set_right_mouse_state(self, new_state: bool) -> None:
        """Queue a press or release of the right mouse button."""
        self.right_mouse.process_event(new_state)

    def update_all(self, delta_time: float) -> None:
        """Advance every button by one frame and poll the gamepad."""
        for button in self.keyboard:
            button.update(delta_time)
        self.left_mouse.update(delta_time)
        self.right_mouse.update(delta_time)

        if self.gamepad_reader is None:
            return
        reading = self.gamepad_reader()
        if reading is None:
            return
        states, axes = reading
        for button, state in zip(self.controller.buttons, states):
            button.process_event(bool(state))
            button.update(delta_time)

        # The triggers are stored crossed over, as the rest of the game expects.
        self.controller.lt = axes[_AXIS_RIGHT_TRIGGER]
        self.controller.rt = axes[_AXIS_LEFT_TRIGGER]
        self.controller.l_stick = Stick(axes[_AXIS_LEFT_X], axes[_AXIS_LEFT_Y])
        self.controller.r_stick = Stick(axes[_AXIS_RIGHT_X], axes[_AXIS_RIGHT_Y])

    def reset_to_zero(self) -> None:
        """Release everything, e.g. when the window loses focus."""
        self.reset_typed()
        for button in self.keyboard:
            button.reset()
        self.left_mouse.reset()
        self.right_mouse.reset()
        self.controller.reset()

    def add_typed(self, c: str) -> None:
        """Append a typed character."""
        self.typed_input += c

    def reset_typed(self) -> None:
        """Forget the characters typed this frame."""
        self.typed_input = ""

    def is_button_held(self, key: int) -> bool:
        """Tell whether ``key`` is held; unknown keys are never held."""
        return _in_range(key) and self.keyboard[key].held

    def is_button_pressed(self, key: int) -> bool:
        """Tell whether ``key`` went down this frame; unknown keys never do."""
        return _in_range(key) and self.keyboard[key].pressed

    def is_button_released(self, key: int) -> bool:
        """Tell whether ``key`` went up this frame; unknown keys never do."""
        return _in_range(key) and self.keyboard[key].released

    def is_button_typed(self, key: int) -> bool:
        """Tell whether ``key`` was typed this frame; unknown keys never are."""
        return _in_range(key) and self.keyboard[key].typed

    def snapshot(self, delta_time: float, has_focus: bool, mouse_x: int, mouse_y: int) -> Input:
        """Build an independent Input for the game from the current state.

        Without focus the gamepad reads as at rest.
        """
        return Input(
            l_mouse=copy.copy(self.left_mouse),
            r_mouse=copy.copy(self.right_mouse),
            mouse_x=mouse_x,
            mouse_y=mouse_y,
            buttons=[copy.copy(b) for b in self.keyboard],
            typed_input=strlcpy(self.typed_input, TYPED_INPUT_SIZE),
            delta_time=delta_time,
            has_focus=has_focus,
            controller=copy.deepcopy(self.controller) if has_focus else Controller(),
        )