"""Components that raise exceptions on purpose, to exercise error handling."""

from __future__ import annotations

import logging
import sys

__all__ = ["LogicError", "Exploder", "Disturbance"]

_exploder_log = logging.getLogger("Exploder")

# Size of one block requested by the oversized allocation, in bytes.
_MEBIBYTE = 1048576

_EXPLODER_MESSAGE = "I hate the world and I am vengeful.\n"
_DISTURBANCE_MESSAGE = "I want to annoy you.\n"


class LogicError(RuntimeError):
    """A framework logic error."""


class Exploder:
    """Raises a memory error, an index error and a logic error in turn.

    Each flag decides whether the corresponding exception is caught here or
    left to propagate to the caller.
    """

    def __init__(
        self,
        manage_bad_alloc: bool = True,
        manage_out_of_range: bool = True,
        manage_art_exception: bool = True,
    ) -> None:
        self.manage_bad_alloc = manage_bad_alloc
        self.manage_out_of_range = manage_out_of_range
        self.manage_art_exception = manage_art_exception

    def analyze(self) -> None:
        """Trigger every exception, catching those the configuration manages."""
        self._run(self._throw_bad_alloc, MemoryError, self.manage_bad_alloc)
        self._run(self._throw_out_of_range, IndexError, self.manage_out_of_range)
        if self.manage_art_exception:
            try:
                raise LogicError(_EXPLODER_MESSAGE)
            except LogicError:
                pass
        else:
            raise LogicError(_EXPLODER_MESSAGE)

    @staticmethod
    def _run(action, error_type: type[BaseException], manage: bool) -> None:
        if not manage:
            action()
            return
        try:
            action()
        except error_type:
            pass

    @staticmethod
    def _throw_out_of_range() -> int:
        data = [0] * 5
        total = 0
        for i in range(10):
            _exploder_log.info("Starting TOOR iteration #%d", i)
            total += data[i]
        _exploder_log.info("TOOR iterations completed.")
        return total

    @staticmethod
    def _throw_bad_alloc() -> None:
        blocks = sys.maxsize // _MEBIBYTE
        _exploder_log.info("Now allocating: %d x %d bytes", blocks, _MEBIBYTE)
        raise MemoryError(f"cannot allocate {blocks} x {_MEBIBYTE} bytes")


class Disturbance:
    """Raises and catches a configured number of logic errors."""

    def __init__(self, n_art_exceptions: int) -> None:
        if n_art_exceptions < 0:
            raise ValueError("number of exceptions must not be negative")
        self.n_art_exceptions = n_art_exceptions

    def produce(self) -> int:
        """Raise and catch the logic errors; return how many were caught."""
        caught = 0
        for _ in range(self.n_art_exceptions):
            try:
                raise LogicError(_DISTURBANCE_MESSAGE)
            except LogicError:
                caught += 1
        return caught