"""Fighters, their actions and sprite animation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import pygame

from duelgame.inputs import Input, Key
from duelgame.logs import log

FRAME_SIZE = 384
MOVE_SPEED = 100.0
REGEN_RATE = 10.0
IDLE_SPRITE = "Defensive_Stance"
MOVE_SPRITE = "Crawl"
SPRITE_SETS = ("blue_right", "blue_left", "red_right", "red_left")

Hitbox = Tuple[float, float, float, float]


@dataclass
class Sprite:
    """A horizontal strip of square animation frames."""

    path: str = ""
    length: int = 0
    texture: Optional[pygame.Surface] = None
    frame_count: int = 0
    hitbox: Hitbox = (0.0, 0.0, 0.0, 0.0)

    @property
    def valid(self) -> bool:
        """Tell whether the sprite has a loaded texture."""
        return self.texture is not None


def load_sprite(path: str, hitbox: Hitbox = (0.0, 0.0, 0.0, 0.0)) -> Sprite:
    """Load a sprite strip from ``path``; a file that cannot be loaded gives no texture."""
    log(f"Trying to load sprite from: {path}")
    if not Path(path).is_file():
        log(f"ERROR: Sprite file does not exist or cannot be opened: {path}")

    try:
        texture: Optional[pygame.Surface] = pygame.image.load(path)
    except (pygame.error, OSError):
        texture = None

    width = texture.get_width() if texture is not None else 0
    frame_count = width // FRAME_SIZE
    return Sprite(
        path=path,
        length=frame_count - 1,
        texture=texture,
        frame_count=frame_count,
        hitbox=hitbox,
    )


@dataclass
class Action:
    """A move a fighter can perform."""

    name: str = ""
    kind: str = ""
    cancelable: bool = False
    applies_modifier: str = "none"
    has_modifier: str = "none"
    has_modifier_value: int = 0
    applies_modifier_value: int = 0
    anim: str = ""
    hitbox: Hitbox = (0.0, 0.0, 0.0, 0.0)
    damage: int = 0
    keybind: int = 0
    frames: int = 0
    mana_cost: int = 0
    stamina_cost: int = 0
    range: int = 0


class Actions:
    """The set of moves and how input selects them."""

    def __init__(self) -> None:
        self.punch = Action(
            name="punch", kind="attack", cancelable=False, anim="Punch_1",
            damage=10, keybind=Key.LEFT_SHIFT, stamina_cost=15, frames=5,
        )
        self.kick = Action(
            name="kick", kind="attack", cancelable=False, anim="Kick",
            damage=20, keybind=Key.LEFT_CTRL, stamina_cost=25, frames=5,
        )
        self.ice_attack = Action(
            name="Iceattack", kind="magic_attack", cancelable=False, anim="Ise_Strice",
            damage=10, keybind=Key.SPACE, stamina_cost=15, mana_cost=75, frames=10,
            applies_modifier="slow", applies_modifier_value=2,
        )
        self.block = Action(
            name="block", kind="defense", cancelable=True, anim="Protect",
            damage=0, keybind=Key.LEFT_ALT, stamina_cost=5, frames=2,
            has_modifier="defense", has_modifier_value=50,
        )
        self.counter = Action(
            name="Counter", kind="attack", cancelable=False, anim="Defense attack",
            damage=30, keybind=Key.LEFT_ALT, stamina_cost=10, frames=4,
            applies_modifier="stun", applies_modifier_value=5,
        )
        self.all_actions = [self.punch, self.kick, self.ice_attack, self.block, self.counter]

    def check_inputs(self, inputs: Input, player: Player) -> Action:
        """Pick the action the input asks for this frame.

        A pressed action key wins over movement; otherwise the result is named
        ``move_left``, ``move_right`` or ``none``.
        """
        result = Action(name="none")
        left = inputs.is_button_held(Key.A)
        right = inputs.is_button_held(Key.D)
        if left and right:
            player.state.is_moving = False
        elif left:
            result.name = "move_left"
        elif right:
            result.name = "move_right"
        else:
            player.state.is_moving = False

        for action in self.all_actions:
            if inputs.is_button_pressed(action.keybind):
                return dataclasses.replace(action)
        return result

    def update_state(self, player: Player, action: Action, delta_time: float) -> None:
        """Apply ``action`` to ``player`` unless a locked animation is running."""
        if player.state.is_in_animation and not player.state.cancellable_animation:
            log("Player is in animation and cannot change state.")
            return
        if action.name == "none":
            return
        if action.name == "move_left":
            player.move("left", delta_time, True)
            return
        if action.name == "move_right":
            player.move("right", delta_time, False)
            return

        player.state.current_action = action
        player.state.is_in_animation = True
        player.state.cancellable_animation = action.cancelable
        player.state.modifier = action.has_modifier
        player.state.is_moving = False
        player.set_sprite(action.anim)
        player.animation.current_frame = 0


@dataclass
class PlayerState:
    """What the fighter is doing right now."""

    is_in_animation: bool = False
    cancellable_animation: bool = True
    state_name: str = ""
    current_action: Action = field(default_factory=Action)
    modifier: str = ""
    facing: str = ""
    i_frame: bool = False
    is_moving: bool = False


@dataclass
class Attributes:
    """Name, position and resources of a fighter."""

    name: str = ""
    position: list = field(default_factory=lambda: [0.0, 0.0])
    health: int = 100
    max_health: int = 100
    mana: int = 100
    stamina: int = 100
    max_stamina: int = 100
    max_mana: int = 100


@dataclass
class AnimationState:
    """The sprite being played and where in it the animation is."""

    sprite: Sprite = field(default_factory=Sprite)
    current_frame: int = 0
    frame_timer: float = 0.0
    frame_duration: float = 0.1
    play_backwards: bool = False
    x_offset: float = 0.0
    y_offset: float = 0.0


@dataclass
class Player:
    """A fighter with sprite sets for each colour and facing."""

    sprites: dict = field(default_factory=lambda: {name: {} for name in SPRITE_SETS})
    state: PlayerState = field(default_factory=PlayerState)
    attributes: Attributes = field(default_factory=Attributes)
    animation: AnimationState = field(default_factory=AnimationState)

    def set_sprite(self, sprite_name: str) -> None:
        """Switch to the named sprite of the current colour and facing, if it exists."""
        if not sprite_name:
            log("Error: setSprite called with empty spriteName!")
            return
        sprite: Optional[Sprite] = None
        set_name = f"{self.attributes.name}_{self.state.facing}"
        if set_name in SPRITE_SETS:
            candidate = self.sprites.get(set_name, {}).get(sprite_name)
            if candidate is not None and candidate.valid:
                sprite = candidate
        if sprite is not None:
            self.animation.sprite = sprite
        else:
            log(f"Error: Sprite '{sprite_name}' not found or invalid texture!")

    def is_able_to_start_anim(self) -> bool:
        """Tell whether no animation is running."""
        return not self.state.is_in_animation

    def move(self, direction: str, delta_time: float, play_backwards: bool) -> None:
        """Walk left or right, playing the crawl animation."""
        if self.state.is_in_animation and not self.state.cancellable_animation:
            self.state.is_moving = False
            return
        was_moving = self.state.is_moving
        was_backwards = self.animation.play_backwards

        self.set_sprite(MOVE_SPRITE)
        self.animation.play_backwards = play_backwards
        self.state.is_moving = True

        if not was_moving or was_backwards != play_backwards:
            self.animation.current_frame = self.animation.sprite.length if play_backwards else 0

        if direction == "left":
            self.attributes.position[0] -= MOVE_SPEED * delta_time
        elif direction == "right":
            self.attributes.position[0] += MOVE_SPEED * delta_time

    def regen_mana_and_stamina(self, delta_time: float) -> None:
        """Regain mana and stamina over time, up to their maxima."""
        attrs = self.attributes
        attrs.mana = min(int(attrs.mana + REGEN_RATE * delta_time), attrs.max_mana)
        attrs.stamina = min(int(attrs.stamina + REGEN_RATE * delta_time), attrs.max_stamina)


class PlayerRenderer:
    """Advances a fighter's animation and draws it."""

    def update_player(self, player: Player, delta_time: float, surface: pygame.Surface) -> bool:
        """Advance the animation; return True when an action animation just finished.

        A finished animation returns to idle without drawing this frame.
        """
        anim = player.animation
        if player.state.is_in_animation:
            anim.frame_timer += delta_time
            if anim.frame_timer >= anim.frame_duration:
                anim.current_frame += 1
                anim.frame_timer -= anim.frame_duration
                if anim.current_frame > anim.sprite.length:
                    log("Animation finished, reseting to idle")
                    anim.current_frame = 0
                    player.set_sprite(IDLE_SPRITE)
                    player.state.is_in_animation = False
                    player.state.is_moving = False
                    return True
        elif player.state.is_moving:
            anim.frame_timer += delta_time
            if anim.frame_timer >= anim.frame_duration:
                anim.frame_timer -= anim.frame_duration
                if anim.play_backwards:
                    anim.current_frame -= 1
                    if anim.current_frame < 0:
                        anim.current_frame = anim.sprite.length
                else:
                    anim.current_frame += 1
                    if anim.current_frame > anim.sprite.length:
                        anim.current_frame = 0
        else:
            anim.current_frame = 0
            player.set_sprite(IDLE_SPRITE)
            player.state.is_in_animation = False
        self.update_frame(player, surface)
        return False

    def update_frame(self, player: Player, surface: pygame.Surface) -> None:
        """Draw the current frame at the fighter's position, scaled to the frame size."""
        sprite = player.animation.sprite
        if sprite.texture is None or sprite.frame_count <= 0:
            return
        texture = sprite.texture
        cell_width = texture.get_width() // sprite.frame_count
        frame = player.animation.current_frame % sprite.frame_count
        area = pygame.Rect(frame * cell_width, 0, cell_width, texture.get_height())
        image = pygame.transform.scale(texture.subsurface(area), (FRAME_SIZE, FRAME_SIZE))
        x, y = player.attributes.position
        surface.blit(image, (int(x), int(y)))


def load_player_sprites(player: Player, base_dir: str) -> None:
    """Load every PNG under ``base_dir/<colour>_<facing>/`` into the player's sprite sets."""
    base = Path(base_dir)
    for set_name in SPRITE_SETS:
        sprite_map = player.sprites.setdefault(set_name, {})
        sprite_map.clear()
        directory = base / set_name
        if not directory.is_dir():
            continue
        for entry in sorted(directory.iterdir()):
            if entry.is_file() and entry.suffix == ".png":
                log(f"Loading sprite: {entry.stem}")
                sprite_map[entry.stem] = load_sprite(str(entry).replace("\\", "/"))