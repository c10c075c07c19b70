"""Runtime module - Bootstrap and launch plan construction"""

from .bootstrap import (
    bootstrap,
    collect_exports,
)

__all__ = [
    "bootstrap",
    "collect_exports",
]
