"""Next-version calculation and changelog generation for git-flow repositories."""

from __future__ import annotations

__version__ = "0.1.0"
