"""CLI package for pdfshrink.

Usage:
    from pdfshrink.cli import app
"""

from __future__ import annotations

from pdfshrink.cli.main import app

__all__ = ["app"]
