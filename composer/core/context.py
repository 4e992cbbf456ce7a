"""Shared-state carrier for a sequential chain of operations.

This module is intentionally app-agnostic and must not import
`composer.foundation` or `composer.framework`.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Sequence, TypeAlias

Producer: TypeAlias = Callable[[], Sequence[str]]


class ChainContext:
    """
    Context passed by reference through every operation of a chain.

    Values are stored as producers and evaluated on every `fetch`, so work for
    a value nobody reads is never done. Applications are expected to subclass
    this to give their operations extra amenities.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._data: dict[str, Producer] = {}
        self.logger = logger or logging.getLogger(__name__)

    def register(self, key: str, producer: Producer) -> None:
        replaced = key in self._data
        self._data[key] = producer
        self.logger.debug("Registered producer for key %s (replaced=%s)", key, replaced)

    def fetch(self, key: str) -> Sequence[str]:
        """
        Evaluate the producer registered under `key`.

        Returns a new empty list when nothing is registered. Whatever the
        producer raises reaches the caller untouched.
        """

        producer = self._data.get(key)
        if producer is None:
            self.logger.debug("No producer registered for key %s; returning empty list", key)
            return []
        return producer()

    def keys(self) -> tuple[str, ...]:
        return tuple(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={list(self._data)!r})"


class ChainOperation(Protocol):
    def __call__(self, ctx: ChainContext) -> None: ...
