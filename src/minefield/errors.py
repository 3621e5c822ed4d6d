"""
Error types raised by the minefield engine.

Illegal clicks are never errors; they are ignored by the board.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidConfig(MinefieldError, ValueError):
    """Board parameters or a mine layout are not usable."""


class PlacementExhausted(MinefieldError, RuntimeError):
    """Mine placement gave up after too many rejected draws."""
