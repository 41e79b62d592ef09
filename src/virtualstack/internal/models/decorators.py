from typing import Callable

from ...common.enums import ColormapChoice
from .registry import ColormapTable, register_colormap


def Colormap(choice: ColormapChoice) -> Callable[[ColormapTable], ColormapTable]:
    """Decorator to register a colormap table generator with its enum choice."""

    def decorator(fn: ColormapTable) -> ColormapTable:
        return register_colormap(choice, fn)

    return decorator
