"""
Monitoring helpers for combat log reads.

This package provides:
- Read timer reporting elapsed time and line counts
- Composite handler to attach monitoring next to a consumer
"""

from .timing import ReadTimer, CompositeHandler

__all__ = ["ReadTimer", "CompositeHandler"]
