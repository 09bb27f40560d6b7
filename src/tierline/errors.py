# SPDX-License-Identifier: MIT


class LayoutError(RuntimeError):
    """Base class for internal consistency failures in the layout engine.

    None of these are user errors. They report a broken invariant or a
    caller that used the engine out of order, and they are never retried.
    """


class PreconditionViolation(LayoutError):
    """An operation was called while the engine was not in a state to serve it."""


class CoordinateOverflow(LayoutError, OverflowError):
    """A computed pixel position does not fit in a signed 32-bit integer."""

    def __init__(self, millis: int, pixel: int) -> None:
        super().__init__(
            f"time {millis} maps to pixel {pixel}, outside the drawable range"
        )
        self.millis = millis
        self.pixel = pixel


class NotFound(LayoutError, LookupError):
    """An interval expected to be placed is not in any level."""
