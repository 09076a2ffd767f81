from __future__ import annotations

from venvlock.layouts.layout import Layout


__all__ = ["Layout"]
