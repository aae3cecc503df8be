"""Mini README: Core package initializer for the finance tracker.

This module exposes convenience imports so the web interface, CLI and tests
can reach shared helpers without knowing the exact module structure. The
calculator engine, the finance stores and the receipt store live in their
own subpackages and are imported explicitly where needed.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
