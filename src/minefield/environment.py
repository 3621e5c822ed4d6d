"""
Gymnasium environment wrapper for the minefield engine.

Acts as a programmatic frame-loop host: every step is one frame that
advances the clock and forwards a single reveal to the engine.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, DEFAULT_CONFIG, RevealOutcome
from .cell import HIDDEN_OBSERVATION, MINE_OBSERVATION
from .engine import BestTime, Engine


REWARDS = {
    RevealOutcome.CONTINUE: 1.0,
    RevealOutcome.WON: 10.0,
    RevealOutcome.LOST: -10.0,
    RevealOutcome.IGNORED: -0.1,
}


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment driving an Engine one frame per step.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an ignored click (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        frame_time: Optional[float] = None,
        best_time: Optional[BestTime] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
            frame_time: Seconds added to the game clock per step.
                Defaults to one frame at render_fps.
            best_time: Best-time record shared with other hosts.
        """
        super().__init__()

        self.config = config or DEFAULT_CONFIG
        self.engine = Engine(self.config, best_time=best_time)
        self.render_mode = render_mode
        self.frame_time = (
            frame_time if frame_time is not None
            else 1.0 / self.metadata["render_fps"]
        )

        self.observation_space = spaces.Box(
            low=HIDDEN_OBSERVATION,
            high=MINE_OBSERVATION,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seed for the mine layout of this and later games.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.reset(random.Random(seed) if seed is not None else None)
        self._steps = 0

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Run one frame: tick the clock, then reveal a cell.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        self.engine.tick(self.frame_time)
        outcome = self.engine.reveal(row, col)

        observation = self.engine.board.get_observation()
        terminated = not self.engine.board.is_playing
        info = self._get_info()
        info["outcome"] = outcome.name

        return observation, REWARDS[outcome], terminated, False, info

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.config.cols)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "phase": board.phase.name,
            "revealed": board.revealed_count,
            "total_safe": self.config.safe_cells,
            "elapsed_time": self.engine.elapsed_time,
            "best_time": self.engine.best_time.value,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        lines = []
        for row in self.engine.board.get_observation():
            symbols = []
            for val in row:
                if val == HIDDEN_OBSERVATION:
                    symbols.append(".")
                elif val == MINE_OBSERVATION:
                    symbols.append("*")
                elif val == 0:
                    symbols.append(" ")
                else:
                    symbols.append(str(val))
            lines.append(" ".join(symbols))
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of cells that can still be revealed.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.engine.board.get_valid_actions():
            mask[row * self.config.cols + col] = True
        return mask
