"""
Board module for the minefield engine.

Implements the grid with mine placement, adjacency counts, cell
revealing with flood-fill expansion, and win/loss detection.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .errors import InvalidConfig, PlacementExhausted

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Session-level state of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class RevealOutcome(Enum):
    """Result of a single reveal request."""

    CONTINUE = auto()
    WON = auto()
    LOST = auto()
    IGNORED = auto()


# Rejected draws allowed per grid cell before placement gives up
PLACEMENT_ATTEMPTS_PER_CELL = 1000


@dataclass
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
        cell_size: Pixel size of a cell, used by the presentation layer
            to map clicks onto cells.
        max_placement_attempts: Cap on random draws during mine
            placement. Defaults to PLACEMENT_ATTEMPTS_PER_CELL per cell.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 15
    cell_size: int = 40
    max_placement_attempts: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()
        if self.max_placement_attempts is None:
            self.max_placement_attempts = (
                PLACEMENT_ATTEMPTS_PER_CELL * self.total_cells
            )

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfig("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidConfig("Board needs at least one mine")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise InvalidConfig(f"Too many mines (max {max_mines})")
        if self.cell_size < 1:
            raise InvalidConfig("Cell size must be positive")
        if (
            self.max_placement_attempts is not None
            and self.max_placement_attempts < self.num_mines
        ):
            raise InvalidConfig("Placement attempt cap is below mine count")

    @property
    def total_cells(self) -> int:
        """Number of cells on the grid."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


DEFAULT_CONFIG = BoardConfig(rows=10, cols=10, num_mines=15, cell_size=40)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Cells live in a flat list indexed by ``row * cols + col``. A new
    board has no mines; call place_mines() (or load_mines()) and
    compute_adjacency() to start a game, or use reset().
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _phase: GamePhase = GamePhase.PLAYING
    _cells_revealed: int = 0
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of hidden, mine-free cells."""
        self._cells = [Cell() for _ in range(self.config.total_cells)]
        self._phase = GamePhase.PLAYING
        self._cells_revealed = 0
        self._mines_placed = False

    def _index(self, row: int, col: int) -> int:
        """Flat index of a grid position."""
        return row * self.config.cols + col

    def _position(self, index: int) -> Position:
        """Grid position of a flat index."""
        return divmod(index, self.config.cols)

    def place_mines(self, rng: Optional[random.Random] = None) -> None:
        """
        Place mines uniformly at random by rejection sampling.

        Draws (row, col) pairs and keeps each one that is not mined yet
        until the configured mine count is reached. The grid is rebuilt
        first, so any previous layout and reveals are discarded.
        Adjacency counts are not updated; call compute_adjacency()
        afterwards.

        Args:
            rng: Random source. A fresh unseeded generator if omitted.

        Raises:
            PlacementExhausted: If the draw cap is hit first.
        """
        rng = rng if rng is not None else random.Random()
        self._init_grid()

        placed = 0
        attempts = 0
        while placed < self.config.num_mines:
            if attempts >= self.config.max_placement_attempts:
                raise PlacementExhausted(
                    f"Placed {placed} of {self.config.num_mines} mines "
                    f"after {attempts} draws"
                )
            attempts += 1
            row = rng.randrange(self.config.rows)
            col = rng.randrange(self.config.cols)
            cell = self._cells[self._index(row, col)]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        self._mines_placed = True

        logger.debug(f"Placed {placed} mines in {attempts} draws")

    def load_mines(self, positions: Iterable[Position]) -> None:
        """
        Place mines at fixed positions on a fresh grid and compute
        adjacency.

        Args:
            positions: Exactly num_mines distinct (row, col) pairs.

        Raises:
            InvalidConfig: On a wrong count, duplicates, or positions
                outside the grid.
        """
        positions = list(positions)
        if len(positions) != self.config.num_mines:
            raise InvalidConfig(
                f"Expected {self.config.num_mines} mines, got {len(positions)}"
            )
        if len(set(positions)) != len(positions):
            raise InvalidConfig("Duplicate mine positions")
        for row, col in positions:
            if not self.is_valid_position(row, col):
                raise InvalidConfig(f"Mine position ({row}, {col}) is off the board")

        self._init_grid()
        for row, col in positions:
            self._cells[self._index(row, col)].is_mine = True
        self._mines_placed = True
        self.compute_adjacency()

    def compute_adjacency(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for index, cell in enumerate(self._cells):
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(
                    *self._position(index)
                )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._cells[self._index(neighbor_row, neighbor_col)].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up-to-8 neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal the cell at the given position.

        A mine loses the game and uncovers every mine. A cell with no
        adjacent mines floods outward over its zero region and the
        numbered cells bordering it. Out-of-bounds positions, revealed
        cells, and clicks after the game ended are ignored.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The outcome of the reveal.
        """
        if not self._can_reveal(row, col):
            return RevealOutcome.IGNORED

        cell = self._cells[self._index(row, col)]
        if cell.is_mine:
            self._reveal_all_mines()
            self._phase = GamePhase.LOST
            logger.info(f"Mine hit at ({row}, {col})")
            return RevealOutcome.LOST

        self._flood_reveal(row, col)

        if self._cells_revealed == self.config.safe_cells:
            self._phase = GamePhase.WON
            logger.info("All safe cells revealed")
            return RevealOutcome.WON
        return RevealOutcome.CONTINUE

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if not self._mines_placed:
            return False
        if self._phase != GamePhase.PLAYING:
            return False
        if not self.is_valid_position(row, col):
            return False
        return self._cells[self._index(row, col)].is_hidden

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal a safe cell and cascade through zero-count neighbors."""
        start = self._cells[self._index(row, col)]
        start.reveal()
        revealed = 1

        # Cells are marked revealed before being pushed, so each one is
        # pushed at most once.
        stack = [(row, col)] if start.adjacent_mines == 0 else []
        while stack:
            current_row, current_col = stack.pop()
            for neighbor_row, neighbor_col in self.neighbors(current_row, current_col):
                neighbor = self._cells[self._index(neighbor_row, neighbor_col)]
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                revealed += 1
                if neighbor.adjacent_mines == 0:
                    stack.append((neighbor_row, neighbor_col))

        self._cells_revealed += revealed
        if revealed > 1:
            logger.debug(f"Cascade from ({row}, {col}) revealed {revealed} cells")

    def _reveal_all_mines(self) -> None:
        """Uncover every mine; safe cells keep their state."""
        for cell in self._cells:
            if cell.is_mine:
                cell.reveal()

    def reset(self, rng: Optional[random.Random] = None) -> None:
        """
        Start a new game on the same dimensions.

        Args:
            rng: Random source for the new mine layout.
        """
        self.place_mines(rng)
        self.compute_adjacency()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self._phase

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._phase == GamePhase.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._phase == GamePhase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._phase == GamePhase.LOST

    @property
    def revealed_count(self) -> int:
        """Number of revealed safe cells."""
        return self._cells_revealed

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._cells[self._index(row, col)]

    def mine_positions(self) -> List[Position]:
        """Positions of all mines, in row-major order."""
        return [
            self._position(index)
            for index, cell in enumerate(self._cells)
            if cell.is_mine
        ]

    def _grid_array(self, values: Iterable, dtype) -> np.ndarray:
        """Shape per-cell values into a (rows, cols) array."""
        return np.array(list(values), dtype=dtype).reshape(
            self.config.rows, self.config.cols
        )

    def revealed_mask(self) -> np.ndarray:
        """Boolean (rows, cols) array of revealed cells."""
        return self._grid_array((cell.is_revealed for cell in self._cells), bool)

    def mine_mask(self) -> np.ndarray:
        """Boolean (rows, cols) array of mine cells."""
        return self._grid_array((cell.is_mine for cell in self._cells), bool)

    def adjacency_grid(self) -> np.ndarray:
        """Adjacent mine counts as an int8 (rows, cols) array; 0 on mines."""
        return self._grid_array(
            (0 if cell.is_mine else cell.adjacent_mines for cell in self._cells),
            np.int8,
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        return self._grid_array(
            (cell.to_observation() for cell in self._cells), np.int8
        )

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of hidden (row, col) positions; empty once the game ended.
        """
        if not self.is_playing:
            return []
        return [
            self._position(index)
            for index, cell in enumerate(self._cells)
            if cell.is_hidden
        ]
