"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over Board's reveal, flag and chord
gestures.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, VisualStatus
from .render import render_compact


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
FLAG = 1
CHORD = 2
NUM_GESTURES = 3

WIN_REWARD = 10.0
LOSS_REWARD = -10.0
NO_OP_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of visual status codes:
        - 0-8 = revealed cell with adjacent mine count
        - 9 = flagged, 10 = highlighted, 11 = mine (game over), 12 = hidden

    Actions:
        Discrete action space of size 3 * rows * cols.
        action // cells picks the gesture (0 reveal, 1 flag, 2 chord)
        and action % cells the cell at (i // cols, i % cols).

    Rewards:
        - +1 per safe cell revealed by a reveal or chord
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
        - 0 for toggling a flag
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=0,
            high=int(VisualStatus.HIDDEN),
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        self._cells = self.config.rows * self.config.cols
        self.action_space = spaces.Discrete(NUM_GESTURES * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.rng = random.Random(int(self.np_random.integers(2**32)))
        self.board.reset()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded gesture and cell, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        gesture, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply(gesture, row, col)

        observation = self.board.get_observation()
        terminated = not self.board.is_running
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Split a flat action into (gesture, row, col)."""
        gesture, index = divmod(int(action), self._cells)
        row, col = divmod(index, self.config.cols)
        return gesture, row, col

    def encode_action(self, gesture: int, row: int, col: int) -> int:
        """Inverse of decode_action."""
        return gesture * self._cells + row * self.config.cols + col

    def _apply(self, gesture: int, row: int, col: int) -> float:
        """
        Perform a gesture and score it.

        Args:
            gesture: REVEAL, FLAG or CHORD.
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        if gesture == FLAG:
            return 0.0 if self.board.flag(row, col) else NO_OP_REWARD

        safe_before = self.board.remaining_safe_cells
        if gesture == REVEAL:
            self.board.reveal(row, col)
        else:
            self.board.hold_start(row, col)
            self.board.hold_release(row, col)

        if self.board.is_lost:
            return LOSS_REWARD
        if self.board.is_won:
            return WIN_REWARD

        revealed = safe_before - self.board.remaining_safe_cells
        return float(revealed) if revealed else NO_OP_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.config.safe_cells - self.board.remaining_safe_cells,
            "total_safe": self.config.safe_cells,
            "remaining_flags": self.board.remaining_flags,
            "game_state": self.board.game_state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_compact(self.board)
        if self.render_mode == "human":
            print(render_compact(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Reveals are valid on hidden cells, flags on any unrevealed cell
        and chords on revealed cells whose flags match their count and
        that still have a hidden neighbor. Nothing is valid once the
        game is over.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_running:
            return mask

        obs = self.board.get_observation()
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                status = obs[row, col]
                if status == VisualStatus.HIDDEN:
                    mask[self.encode_action(REVEAL, row, col)] = True
                if status in (VisualStatus.HIDDEN, VisualStatus.FLAGGED):
                    mask[self.encode_action(FLAG, row, col)] = True
                if self.board.can_chord(row, col):
                    mask[self.encode_action(CHORD, row, col)] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for batched play.

    Args:
        n_envs: Number of environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=BoardConfig(**vars(config)) if config else None)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
