"""
Game engine for a minefield session.

Wraps a Board with the per-session clock and the best-time record
that outlives individual games. A host drives it once per frame:

    engine = Engine()
    engine.tick(frame_seconds)
    engine.reveal(row, col)
    snapshot = engine.snapshot()
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .board import Board, BoardConfig, DEFAULT_CONFIG, GamePhase, RevealOutcome

logger = logging.getLogger(__name__)


# ============================================================================
# Score Bookkeeping
# ============================================================================

class BestTime:
    """
    Fastest finished game seen by this process.

    Unset until the first game ends. Share one instance between engines
    (or keep it on the host) to carry the record across sessions.
    """

    def __init__(self, value: Optional[float] = None) -> None:
        self.value = value

    @property
    def is_set(self) -> bool:
        """Check if any game has finished yet."""
        return self.value is not None

    def offer(self, elapsed: float) -> bool:
        """
        Record a finished game's time.

        Args:
            elapsed: Seconds the game took.

        Returns:
            True if the time became the new best.
        """
        if self.value is not None and elapsed >= self.value:
            return False
        self.value = elapsed
        return True

    def __repr__(self) -> str:
        return f"BestTime({self.value!r})"


@dataclass
class SessionStats:
    """Clock and scoring flags for the current game."""

    elapsed_time: float = 0.0
    score_recorded: bool = False


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Render-ready copy of the engine state.

    Attributes:
        revealed: Boolean (rows, cols) array of revealed cells.
        has_mine: Boolean (rows, cols) array of mine cells.
        adjacent: int8 (rows, cols) array of adjacent mine counts.
        phase: Current game phase.
        elapsed_time: Seconds played in this game.
        best_time: Fastest finished game, or None.
    """

    revealed: np.ndarray
    has_mine: np.ndarray
    adjacent: np.ndarray
    phase: GamePhase
    elapsed_time: float
    best_time: Optional[float]


# ============================================================================
# Engine
# ============================================================================

class Engine:
    """
    Owns one board, its session clock, and the best-time record.

    A new engine starts a game straight away: mines are placed and
    counted during construction.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        best_time: Optional[BestTime] = None,
    ) -> None:
        """
        Initialize the engine and start the first game.

        Args:
            config: Board dimensions and mine count.
            rng: Random source for mine layouts.
            best_time: Shared best-time record; a fresh one if omitted.
        """
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.best_time = best_time if best_time is not None else BestTime()
        self.board = Board(config)
        self.stats = SessionStats()
        self.reset()

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell and record the score if the game just ended.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The board's reveal outcome.
        """
        outcome = self.board.reveal(row, col)
        if outcome in (RevealOutcome.WON, RevealOutcome.LOST):
            self.on_game_end()
        return outcome

    def tick(self, delta_seconds: float) -> None:
        """Advance the game clock while the game is in progress."""
        if not self.board.is_playing:
            return
        if not math.isfinite(delta_seconds) or delta_seconds <= 0:
            return
        self.stats.elapsed_time += delta_seconds

    def on_game_end(self) -> None:
        """Offer this game's time to the best-time record, once per game."""
        if self.stats.score_recorded or self.board.is_playing:
            return
        self.stats.score_recorded = True
        elapsed = self.stats.elapsed_time
        if self.best_time.offer(elapsed):
            logger.info(f"New best time: {elapsed:.2f}s")
        logger.info(
            f"Game {self.board.phase.name.lower()} after {elapsed:.2f}s"
        )

    def reset(self, rng: Optional[random.Random] = None) -> None:
        """
        Start a new game, keeping the best time.

        Args:
            rng: Replacement random source for this and later layouts.
        """
        if rng is not None:
            self.rng = rng
        self.board.reset(self.rng)
        self.stats = SessionStats()

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self.board.phase

    @property
    def elapsed_time(self) -> float:
        """Seconds played in the current game."""
        return self.stats.elapsed_time

    def snapshot(self) -> BoardSnapshot:
        """Copy the current state for rendering."""
        return BoardSnapshot(
            revealed=self.board.revealed_mask(),
            has_mine=self.board.mine_mask(),
            adjacent=self.board.adjacency_grid(),
            phase=self.board.phase,
            elapsed_time=self.stats.elapsed_time,
            best_time=self.best_time.value,
        )
