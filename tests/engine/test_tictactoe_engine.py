"""
Tests for the TicTacToeEngine class.

This module contains tests for the TicTacToeEngine class to ensure it
drives rounds correctly, applies the computer's win/block heuristic, and
publishes the expected events.
"""

import random

import pytest
from unittest.mock import MagicMock, patch

from parlor.common.errors import InvalidActionError, InvalidCellError
from parlor.engine.tictactoe import TicTacToeEngine
from parlor.events import EngineEventType, EventEmitter
from parlor.tictactoe.state import GameStage, GameState, Marker


def lowest_cell(cells):
    return cells[0]


def highest_cell(cells):
    return cells[-1]


def exchange(engine, *human_moves):
    """Play each human move followed by the computer's reply, returning the replies."""
    replies = []
    for cell in human_moves:
        engine.apply_human_move(cell)
        if engine.state.stage is GameStage.AWAITING_MOVE:
            replies.append(engine.apply_computer_move())
    return replies


@pytest.fixture
def engine():
    """Create a TicTacToeEngine whose fallback takes the lowest free cell."""
    return TicTacToeEngine({"human_name": "Ada"}, fallback=lowest_cell)


def test_initialization(engine):
    assert engine.human_name == "Ada"
    assert engine.computer_name == "Hal"
    assert engine.state.stage is GameStage.AWAITING_MOVE
    assert engine.state.turn is Marker.HUMAN
    assert engine.board.unmarked_cells() == list(range(1, 10))


@patch.object(EventEmitter, "emit")
def test_start_game(mock_emit, engine):
    engine.start_game()

    calls = [args[0] for args, _ in mock_emit.call_args_list]
    assert calls == [EngineEventType.GAME_STARTED, EngineEventType.ROUND_STARTED]
    assert mock_emit.call_args[0][1]["round_number"] == 1


def test_human_move(engine):
    engine.apply_human_move(5)
    assert engine.board[5] is Marker.HUMAN
    assert engine.state.turn is Marker.COMPUTER


@patch.object(EventEmitter, "emit")
def test_move_emits_square_marked(mock_emit, engine):
    engine.apply_human_move(5)

    mock_emit.assert_called_once()
    event_type, data = mock_emit.call_args[0]
    assert event_type is EngineEventType.SQUARE_MARKED
    assert data["cell"] == 5
    assert data["marker"] == "HUMAN"


def test_human_move_on_marked_cell(engine):
    engine.apply_human_move(5)
    engine.apply_computer_move()
    with pytest.raises(InvalidCellError):
        engine.apply_human_move(5)
    with pytest.raises(InvalidCellError):
        engine.apply_human_move(1)
    # Still the human's turn after a rejected move
    assert engine.state.turn is Marker.HUMAN


@pytest.mark.parametrize("cell", [0, 10, "3"])
def test_human_move_out_of_range(engine, cell):
    with pytest.raises(InvalidCellError):
        engine.apply_human_move(cell)
    assert engine.board.unmarked_cells() == list(range(1, 10))


def test_human_cannot_move_twice(engine):
    engine.apply_human_move(5)
    with pytest.raises(InvalidActionError):
        engine.apply_human_move(1)


def test_computer_cannot_move_first(engine):
    with pytest.raises(InvalidActionError):
        engine.apply_computer_move()


def test_computer_uses_fallback_without_threats(engine):
    assert exchange(engine, 5) == [1]
    assert engine.board[1] is Marker.COMPUTER


def test_computer_blocks_human_threat():
    engine = TicTacToeEngine(fallback=highest_cell)
    # 9 by fallback, then 3 to stop the top row
    assert exchange(engine, 1, 2) == [9, 3]


def test_computer_prefers_win_over_block(engine):
    # Computer holds 1 and 2 when the human threatens 4-5-6
    assert exchange(engine, 5, 9, 4) == [1, 2, 3]

    outcome = engine.round_outcome()
    assert outcome.winner is Marker.COMPUTER
    assert not outcome.is_tie
    assert engine.state.computer_score == 1
    assert engine.state.stage is GameStage.ROUND_OVER


def test_default_fallback_uses_seeded_rng():
    picks = []
    for _ in range(2):
        engine = TicTacToeEngine(rng=random.Random(99))
        engine.apply_human_move(5)
        picks.append(engine.apply_computer_move())
    assert picks[0] == picks[1]
    assert picks[0] in (1, 2, 3, 4, 6, 7, 8, 9)


def test_seed_in_config():
    picks = []
    for _ in range(2):
        engine = TicTacToeEngine({"seed": 7})
        engine.apply_human_move(5)
        picks.append(engine.apply_computer_move())
    assert picks[0] == picks[1]


def test_round_outcome_is_none_mid_round(engine):
    assert engine.round_outcome() is None
    engine.apply_human_move(5)
    assert engine.round_outcome() is None


def test_tie_round(engine):
    replies = exchange(engine, 5, 2, 4, 3, 9)

    assert replies == [1, 8, 6, 7]
    assert engine.board.is_full()
    outcome = engine.round_outcome()
    assert outcome.is_tie
    assert outcome.winner is None
    assert engine.state.human_score == 0
    assert engine.state.computer_score == 0
    assert engine.state.rounds_played == 1


def test_human_wins_round(engine):
    # Computer blocks 3-6-9, leaving 3-5-7 open
    replies = exchange(engine, 5, 9, 3, 7)

    assert replies == [1, 2, 6]
    assert engine.round_outcome().winner is Marker.HUMAN
    assert engine.state.human_score == 1
    assert not engine.game_outcome().is_over


def test_no_computer_move_after_round_over(engine):
    exchange(engine, 5, 9, 4)
    with pytest.raises(InvalidActionError):
        engine.apply_computer_move()
    with pytest.raises(InvalidActionError):
        engine.apply_human_move(6)


def test_next_round(engine):
    exchange(engine, 5, 9, 3, 7)
    engine.next_round()

    assert engine.round_outcome() is None
    assert engine.board.unmarked_cells() == list(range(1, 10))
    assert engine.state.turn is Marker.HUMAN
    assert engine.state.human_score == 1


def test_next_round_during_play(engine):
    engine.apply_human_move(5)
    with pytest.raises(InvalidActionError):
        engine.next_round()


def test_game_over_and_restart(engine):
    engine.state = GameState(human_score=4, computer_score=2)
    on_game_end = MagicMock()
    engine.event_emitter.on(EngineEventType.GAME_ENDED, on_game_end)

    exchange(engine, 5, 9, 3, 7)

    outcome = engine.game_outcome()
    assert outcome.is_over
    assert outcome.winner is Marker.HUMAN
    assert outcome.human_score == 5
    assert outcome.computer_score == 2
    on_game_end.assert_called_once()
    assert on_game_end.call_args[0][0]["winner"] == "HUMAN"

    with pytest.raises(InvalidActionError):
        engine.next_round()

    engine.restart()
    outcome = engine.game_outcome()
    assert not outcome.is_over
    assert outcome.winner is None
    assert outcome.human_score == 0
    assert outcome.computer_score == 0
    assert engine.state.stage is GameStage.AWAITING_MOVE


def test_restart_mid_round(engine):
    engine.apply_human_move(5)
    engine.restart()
    assert engine.board.unmarked_cells() == list(range(1, 10))
    assert engine.state.turn is Marker.HUMAN


def test_round_events(engine):
    ended = MagicMock()
    engine.event_emitter.on(EngineEventType.ROUND_ENDED, ended)

    exchange(engine, 5, 9, 4)

    ended.assert_called_once()
    data = ended.call_args[0][0]
    assert data["winner"] == "COMPUTER"
    assert data["round_number"] == 1
    assert data["computer_score"] == 1


def test_render_state(engine):
    engine.apply_human_move(5)
    rendered = engine.render_state()

    assert rendered["board"][1] == [" ", "X", " "]
    assert rendered["human"] == {"name": "Ada", "glyph": "X"}
    assert rendered["computer"] == {"name": "Hal", "glyph": "O"}


def test_custom_glyphs():
    engine = TicTacToeEngine({"human_glyph": "H", "computer_glyph": "C"}, fallback=lowest_cell)
    exchange(engine, 5)
    assert engine.render_state()["board"][0] == ["C", " ", " "]
    assert engine.render_state()["board"][1] == [" ", "H", " "]


@pytest.mark.parametrize(
    "config",
    [
        {"human_glyph": "XX"},
        {"computer_glyph": ""},
        {"human_glyph": 1},
        {"human_glyph": "O"},
        {"human_glyph": " "},
        {"computer_glyph": " "},
    ],
)
def test_invalid_glyphs(config):
    with pytest.raises(ValueError):
        TicTacToeEngine(config)
