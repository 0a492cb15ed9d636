import pygame
import pytest

from duelgame.game import Game, GameData, best_monitor, key_for_event
from duelgame.inputs import Input, Key

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def _resources(tmp_path):
    res = tmp_path / "resources"
    res.mkdir()
    return res


def _save_image(path, size, colour):
    path.parent.mkdir(parents=True, exist_ok=True)
    image = pygame.Surface(size)
    image.fill(colour)
    pygame.image.save(image, str(path))


def test_key_for_event_letters_and_digits():
    assert key_for_event(pygame.K_a) == Key.A
    assert key_for_event(pygame.K_z) == Key.Z
    assert key_for_event(pygame.K_0) == Key.NR0
    assert key_for_event(pygame.K_9) == Key.NR9


def test_key_for_event_special_and_unknown():
    assert key_for_event(pygame.K_SPACE) == Key.SPACE
    assert key_for_event(pygame.K_RETURN) == Key.ENTER
    assert key_for_event(pygame.K_LSHIFT) == Key.LEFT_SHIFT
    assert key_for_event(pygame.K_LALT) == Key.LEFT_ALT
    assert key_for_event(pygame.K_F1) is None


def test_best_monitor_picks_largest_overlap():
    monitors = [(0, 0, 1920, 1080), (1920, 0, 1920, 1080)]
    assert best_monitor((2000, 100, 800, 600), monitors) == 1
    assert best_monitor((100, 100, 800, 600), monitors) == 0


def test_best_monitor_without_overlap_is_none():
    assert best_monitor((5000, 5000, 10, 10), [(0, 0, 100, 100)]) is None
    assert best_monitor((0, 0, 10, 10), []) is None


def test_best_monitor_tie_keeps_first():
    monitors = [(0, 0, 100, 100), (100, 0, 100, 100)]
    assert best_monitor((50, 0, 100, 100), monitors) == 0


def test_init_sets_up_first_player(tmp_path):
    game = Game(str(_resources(tmp_path)))
    assert game.init() is True
    assert game.player1.state.facing == "right"
    assert game.player1.attributes.name == "blue"
    assert game.player1.attributes.position == [700.0, 350.0]
    assert game.data == GameData()


def test_close_and_init_round_trip(tmp_path):
    res = _resources(tmp_path)
    game = Game(str(res))
    game.init()
    game.data.rect_pos = [12.5, 40.0]
    game.close()
    assert (res / "gameData.data").exists()

    again = Game(str(res))
    again.init()
    assert again.data.rect_pos == [12.5, 40.0]


def test_short_saved_data_keeps_defaults(tmp_path):
    res = _resources(tmp_path)
    (res / "gameData.data").write_bytes(b"\x01")
    game = Game(str(res))
    game.init()
    assert game.data.rect_pos == [100.0, 100.0]


def test_init_loads_idle_sprite(tmp_path):
    res = _resources(tmp_path)
    sprite_path = res / "assets" / "sprites" / "blue_right" / "Defensive_Stance.png"
    _save_image(sprite_path, (768, 384), (255, 0, 0))
    game = Game(str(res))
    game.init()
    assert game.player1.animation.sprite.path.endswith("Defensive_Stance.png")
    assert game.player1.animation.sprite.length == 1


def test_logic_without_surface_raises(tmp_path):
    game = Game(str(_resources(tmp_path)))
    game.init()
    with pytest.raises(RuntimeError):
        game.logic(0.016, Input())


def test_logic_draws_background_and_player(tmp_path):
    res = _resources(tmp_path)
    _save_image(res / "assets" / "bg" / "bg2.png", (10, 10), (0, 255, 0))
    _save_image(
        res / "assets" / "sprites" / "blue_right" / "Defensive_Stance.png",
        (768, 384),
        (255, 0, 0),
    )
    surface = pygame.Surface((1200, 800))
    game = Game(str(res), surface)
    game.init()
    assert game.logic(0.016, Input()) is True
    assert tuple(surface.get_at((5, 5))) == GREEN
    assert tuple(surface.get_at((800, 400))) == RED


def test_logic_moves_player_right(tmp_path):
    surface = pygame.Surface((100, 100))
    game = Game(str(_resources(tmp_path)), surface)
    game.init()
    inputs = Input()
    inputs.buttons[Key.D].held = True
    start_x = game.player1.attributes.position[0]
    assert game.logic(0.1, inputs) is True
    assert game.player1.attributes.position[0] > start_x
    assert game.player1.state.is_moving is True


def test_logic_pressed_action_starts_animation(tmp_path):
    surface = pygame.Surface((100, 100))
    game = Game(str(_resources(tmp_path)), surface)
    game.init()
    inputs = Input()
    inputs.buttons[Key.LEFT_SHIFT].pressed = True
    game.logic(0.01, inputs)
    assert game.player1.state.current_action.name == "punch"
    assert game.player1.state.is_in_animation is True