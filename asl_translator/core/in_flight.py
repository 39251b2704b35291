"""
Module: in_flight.py
Description: Single-slot in-flight guard
Author: Hackathon Team
Date: 2026

A capacity-one slot: offering work while the slot is occupied is rejected
immediately, never queued. Each acquisition gets its own token so a late
finisher can only ever free the slot it took.
"""
import logging
from typing import Optional

# Setup logging
logger = logging.getLogger(__name__)


class InFlightToken:
    """Proof of holding an InFlightGuard slot."""

    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"InFlightToken({self.name!r})"


class InFlightGuard:
    """
    Allows at most one operation of a kind to be outstanding.

    Example usage:
        guard = InFlightGuard('detection')
        token = guard.try_acquire()
        if token is None:
            return  # busy, drop this request
        try:
            ...
        finally:
            guard.release(token)
    """

    def __init__(self, name: str):
        self.name = name
        self._holder: Optional[InFlightToken] = None

    @property
    def busy(self) -> bool:
        return self._holder is not None

    def try_acquire(self) -> Optional[InFlightToken]:
        """
        Take the slot if it is free.

        Returns:
            A token if acquired, None if another operation holds the slot
        """
        if self._holder is not None:
            logger.debug(f"{self.name}: slot occupied, request rejected")
            return None
        self._holder = InFlightToken(self.name)
        return self._holder

    def release(self, token: InFlightToken) -> bool:
        """
        Free the slot if `token` still holds it.

        Returns:
            True if the slot was freed by this call
        """
        if self._holder is token:
            self._holder = None
            return True
        return False

    def reset(self) -> None:
        """Forget the current holder; its later release becomes a no-op."""
        self._holder = None
