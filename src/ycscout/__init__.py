"""YC Scout: LLM-driven company search over the Y Combinator directory."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("yc-scout")
except Exception:
    __version__ = "0.0.0"
