"""Reusable chain kernel: the shared context every operation of a chain receives.

This package is intentionally independent of `composer.foundation` and
`composer.framework`; it only depends on the standard library.
"""

from composer.core.context import ChainContext, ChainOperation, Producer

__all__ = [
    "ChainContext",
    "ChainOperation",
    "Producer",
]
