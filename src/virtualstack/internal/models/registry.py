"""Registry for auto-discovered colormap table generators."""

from typing import Callable

import numpy as np

from ...common.enums import ColormapChoice

ColormapTable = Callable[[int], np.ndarray]

# Registry dictionary for auto-discovered components
_colormap_map: dict[ColormapChoice, ColormapTable] = {}


def register_colormap(choice: ColormapChoice, fn: ColormapTable) -> ColormapTable:
    """Register a colormap table generator with its enum choice."""
    _colormap_map[choice] = fn
    return fn
