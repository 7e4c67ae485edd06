"""Scout runs: one query → one browser session → one extraction."""

from ycscout.scout.runner import run_scout

__all__ = ["run_scout"]
