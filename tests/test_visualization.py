# tests/test_visualization.py
from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

from tetris_engine.game import Intent, TetrisGame  # noqa: E402
from tetris_engine.game.core import INPUT_INTENTS  # noqa: E402
from tetris_engine.visualization.human_play import KEY_TO_INTENT, build_parser  # noqa: E402
from tetris_engine.game.grid import ACTIVE, EMPTY, LOCKED  # noqa: E402
from tetris_engine.visualization.renderer import Renderer, _color_for_value  # noqa: E402


@pytest.fixture()
def screen():
    pygame.init()
    renderer = Renderer(cell_size=10)
    surface = pygame.display.set_mode(renderer.window_size(20, 10))
    yield surface
    pygame.quit()


def test_keys_map_to_the_four_input_intents() -> None:
    assert set(KEY_TO_INTENT.values()) == set(INPUT_INTENTS)
    assert Intent.TICK not in KEY_TO_INTENT.values()


def test_renderer_draws_without_touching_state(screen) -> None:
    game = TetrisGame()
    state = game.state
    board_before = state.board.copy()
    Renderer(cell_size=10).draw(screen, state)
    assert game.state is state
    assert (state.board == board_before).all()


def test_window_size_includes_margins_and_hud() -> None:
    assert Renderer(cell_size=10, margin=5, hud_height=20).window_size(20, 10) == (110, 230)


def test_cli_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.tick_ms == 1000
    assert not args.no_game_over


def test_active_and_locked_cells_have_distinct_colours() -> None:
    colours = {_color_for_value(v) for v in (EMPTY, LOCKED, ACTIVE)}
    assert len(colours) == 3


def test_game_over_banner_font_is_created_once(screen) -> None:
    game = TetrisGame()
    over = game.state.evolve(piece=None, is_game_over=True)
    renderer = Renderer(cell_size=10)
    renderer.draw(screen, over)
    font = renderer._banner_font
    assert font is not None
    renderer.draw(screen, over)
    assert renderer._banner_font is font
