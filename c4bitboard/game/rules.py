"""
rules.py - Game management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which tracks the result of a game played on a BoardState
2. ConnectFourEnv, a gymnasium-compatible environment over the same board
"""

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from c4bitboard.debug import debug
from c4bitboard.utils import ROWS, COLS, MAX_MOVES, Player, GameResult, is_valid_column
from c4bitboard.game.bitboard import BoardState


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Wraps a BoardState with move validation, the list of columns played and
    the game result, so drivers do not have to evaluate the board themselves.
    """

    def __init__(self):
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = BoardState.create()
        self.moves: List[int] = []
        self.result = GameResult.IN_PROGRESS

    def reset(self) -> None:
        debug.debug("Resetting game", "game")
        self.board = BoardState.create()
        self.moves = []
        self.result = GameResult.IN_PROGRESS

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move can be played.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the game is running and the column exists and has room
        """
        if self.result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.result.name})", "game")
            return False

        if not is_valid_column(column):
            debug.debug(f"Invalid move: column {column} out of bounds", "game")
            return False

        if not self.board.can_drop(column):
            debug.debug(f"Invalid move: column {column} is full", "game")
            return False

        return True

    def make_move(self, column: int) -> bool:
        """
        Play a piece for the current player and update the result.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move was played, False if it was rejected
        """
        if not self.is_valid_move(column):
            return False

        mover = self.board.current_player
        self.board.drop(column)
        self.moves.append(int(column))
        debug.debug(f"Player {mover.value} played column {column}", "game")

        if self.board.has_win():
            self.result = GameResult.win_for(mover)
            debug.info(f"Player {mover.value} wins after {self.board.move_count} moves", "game")
        elif self.board.move_count == MAX_MOVES:
            self.result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")

        return True

    def get_state(self) -> BoardState:
        return self.board

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None while in progress or on a draw
        """
        if self.result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        if self.result.is_game_over():
            return []
        return self.board.valid_moves()

    def get_winning_line(self) -> List[Tuple[int, int]]:
        if self.get_winner() is None:
            return []
        return self.board.winning_line()

    def render(self) -> str:
        return self.board.render(self.get_winning_line())


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both players act through step(); rewards are given from player one's
    point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: None, 'ascii' (render returns text) or 'human' (render prints)
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.game = ConnectFourGame()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play the current player's piece in the given column.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        if not self.game.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.make_move(action)

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif self.game.result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif self.game.result == GameResult.DRAW:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Episode finished: {self.game.result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()

        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.to_array()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.game.get_valid_moves()

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.get_current_player().value,
            'game_result': self.game.result.name,
            'moves_made': self.game.board.move_count,
            'winning_line': self.game.get_winning_line(),
        }
