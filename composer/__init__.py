"""Composable chains of operations sharing a lazily evaluated context."""

from composer.core import ChainContext, ChainOperation, Producer

__all__ = [
    "ChainContext",
    "ChainOperation",
    "Producer",
]
