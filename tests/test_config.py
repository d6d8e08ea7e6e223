# tests/test_config.py
from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from tetris_engine.game import GameConfig, ScoringRules
from tetris_engine.utils.logging import setup_logger


def test_defaults_match_the_classic_board() -> None:
    config = GameConfig()
    assert (config.rows, config.cols) == (20, 10)
    assert config.tick_ms == 1000
    assert config.detect_game_over


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"rows": 0}, "rows"),
        ({"cols": 4}, "cols"),
        ({"tick_ms": 0}, "tick_ms"),
    ],
)
def test_invalid_config_is_rejected(kwargs: dict, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        GameConfig(**kwargs)


def test_scoring_is_linear() -> None:
    rules = ScoringRules()
    assert [rules.score_for_lines(n) for n in range(5)] == [0, 100, 200, 300, 400]


def test_setup_logger_installs_a_single_handler() -> None:
    logger = setup_logger(name="tetris_engine.test", level="debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert not logger.propagate

    logger = setup_logger(name="tetris_engine.test", use_rich=False, level="warning")
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.WARNING


def test_log_lines_carry_the_logger_name() -> None:
    for use_rich in (True, False):
        logger = setup_logger(name="tetris_engine.named", use_rich=use_rich)
        record = logger.makeRecord(logger.name, logging.INFO, __file__, 1, "hello", None, None)
        assert "tetris_engine.named: hello" in logger.handlers[0].format(record)
