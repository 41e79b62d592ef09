from typing import Union

import numpy as np

from ...common.enums import ColormapChoice
from ...common.exceptions import (
    VirtualStackConfigurationException,
    VirtualStackValidationException,
)

# Import module to trigger decorator registration
from . import colormaps  # noqa: F401
from .registry import _colormap_map

# 2**16 rows; larger tables are not practical to materialize
MAX_COLORMAP_BITDEPTH = 16


class ColormapFactory:
    """Factory that dispatches to the registered table generator for a name."""

    @classmethod
    def resolve(cls, name: Union[str, ColormapChoice]) -> ColormapChoice:
        if isinstance(name, ColormapChoice):
            return name
        try:
            return ColormapChoice(str(name).lower())
        except ValueError as e:
            raise VirtualStackValidationException(
                f"Unknown colormap '{name}'. "
                f"Supported colormaps: {', '.join(c.value for c in ColormapChoice)}"
            ) from e

    @classmethod
    def create(cls, name: Union[str, ColormapChoice], size: int) -> np.ndarray:
        if size < 1:
            raise VirtualStackValidationException(
                f"Colormap size must be positive, got {size}"
            )
        return _colormap_map[cls.resolve(name)](size)

    @classmethod
    def for_bitdepth(
        cls, name: Union[str, ColormapChoice], bitdepth: int
    ) -> np.ndarray:
        """Build a table with one row per representable value of ``bitdepth``."""
        if bitdepth > MAX_COLORMAP_BITDEPTH:
            raise VirtualStackConfigurationException(
                f"Cannot build a colormap for {bitdepth}-bit images; "
                f"at most {MAX_COLORMAP_BITDEPTH} bits are supported"
            )
        return cls.create(name, 2**bitdepth)
