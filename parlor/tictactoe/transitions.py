"""
State transition functions for the Tic Tac Toe game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects.
"""

from dataclasses import replace
from typing import Optional

from parlor.common.errors import InvalidActionError
from parlor.tictactoe.rules import winning_marker
from parlor.tictactoe.state import Board, GameStage, GameState, Marker


class StateTransitionEngine:
    """
    Pure functions for state transitions in Tic Tac Toe.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def apply_move(state: GameState, cell: int, marker: Marker) -> GameState:
        """
        Mark a square for the side whose turn it is.

        If the move completes a line or fills the board the round ends and the
        tallies are updated; otherwise the turn passes to the other side.

        Args:
            state: Current game state
            cell: Cell number 1-9
            marker: Side making the move

        Returns:
            New game state with the move applied

        Raises:
            InvalidActionError: If no round is in progress or it is not ``marker``'s turn
            InvalidCellError: If the cell is out of range or already marked
        """
        if state.stage is not GameStage.AWAITING_MOVE:
            raise InvalidActionError(f"Cannot move while the game is {state.stage.name}")
        if marker is not state.turn:
            raise InvalidActionError(f"It is not {marker.name}'s turn")

        board = state.board.mark(cell, marker)
        winner = winning_marker(board)
        if winner is not None or board.is_full():
            return StateTransitionEngine.end_round(replace(state, board=board), winner)

        return replace(state, board=board, turn=marker.opponent)

    @staticmethod
    def end_round(state: GameState, winner: Optional[Marker]) -> GameState:
        """
        Close the current round and credit the winner, if any.

        Args:
            state: Current game state
            winner: Side that completed a line, or None for a tie

        Returns:
            New game state in ROUND_OVER, or GAME_OVER once a tally reaches the winning score
        """
        human_score = state.human_score + (1 if winner is Marker.HUMAN else 0)
        computer_score = state.computer_score + (1 if winner is Marker.COMPUTER else 0)

        new_state = replace(
            state,
            human_score=human_score,
            computer_score=computer_score,
            rounds_played=state.rounds_played + 1,
            round_winner=winner,
            stage=GameStage.ROUND_OVER,
        )
        if new_state.game_winner is not None:
            new_state = replace(new_state, stage=GameStage.GAME_OVER)
        return new_state

    @staticmethod
    def next_round(state: GameState) -> GameState:
        """
        Start a fresh round after a finished one. The human always moves first.

        Raises:
            InvalidActionError: If the current round is not over, or the game is
        """
        if state.stage is not GameStage.ROUND_OVER:
            raise InvalidActionError(
                f"Cannot start a new round while the game is {state.stage.name}"
            )
        return replace(
            state,
            board=Board(),
            turn=Marker.HUMAN,
            round_winner=None,
            stage=GameStage.AWAITING_MOVE,
        )

    @staticmethod
    def restart(state: GameState) -> GameState:
        """
        Reset tallies and board for a brand new game.
        """
        return replace(
            state,
            board=Board(),
            turn=Marker.HUMAN,
            human_score=0,
            computer_score=0,
            rounds_played=0,
            round_winner=None,
            stage=GameStage.AWAITING_MOVE,
        )
