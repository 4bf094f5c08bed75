"""Shared rich console."""

import os
from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """One console per highlight setting.

    Styling is off when ``NO_COLOR`` is set. Commands apply their profile's
    ``output.color`` through ``set_color``.
    """
    return Console(highlight=highlight, no_color=bool(os.environ.get("NO_COLOR")))


def set_color(enabled: bool) -> None:
    """Turn styling on or off for the shared console; ``NO_COLOR`` always wins."""
    get_console().no_color = not enabled or bool(os.environ.get("NO_COLOR"))
