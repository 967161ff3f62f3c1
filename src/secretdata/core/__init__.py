"""Core infrastructure subpackage.

This package contains the SecretFinder facade that wires one lookup
together.
"""

from secretdata.core.finder import SecretFinder

__all__ = [
    "SecretFinder",
]
