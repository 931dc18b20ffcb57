"""Exception types raised by the puzzle generator."""

from __future__ import annotations


class JigsawError(Exception):
    """Base class for every error raised by :mod:`jigsawgrid`."""


class PuzzleConfigError(JigsawError, ValueError):
    """Rejected configuration (piece counts, dimensions, jitter).

    Raised before any generation work starts.
    """


class InvariantViolation(JigsawError, RuntimeError):
    """The generator produced inconsistent topology or geometry.

    This is a bug in the generator, not in the caller's input.
    """


class SerializationError(JigsawError, RuntimeError):
    """The puzzle could not be rendered to text."""
