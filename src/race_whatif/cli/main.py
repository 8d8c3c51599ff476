"""
CLI entry point using Typer.

Provides commands for what-if race simulation:
- compare: Compare a baseline scenario with overrides or a preset
- presets: List preset scenarios
- heat: Heat index and heat-risk tier
- ranges: Admissible override ranges
- validate: Clamp/snap a single override value
"""

from .app import app
from .commands import reference, simulate  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
