"""Colormap tables as (size, 3) float64 RGB arrays in [0, 1]."""

import cv2
import numpy as np

from ...common.enums import ColormapChoice
from .decorators import Colormap

OPENCV_LUT_SIZE = 256


def _resample(table: np.ndarray, size: int) -> np.ndarray:
    """Linearly interpolate a colormap table to ``size`` rows."""
    if len(table) == size:
        return table
    source = np.linspace(0.0, 1.0, len(table))
    target = np.linspace(0.0, 1.0, size)
    return np.stack(
        [np.interp(target, source, table[:, channel]) for channel in range(3)],
        axis=1,
    )


def _opencv_table(cv2_colormap: int, size: int) -> np.ndarray:
    """Read an OpenCV colormap into an RGB table of ``size`` rows."""
    ramp = np.arange(OPENCV_LUT_SIZE, dtype=np.uint8).reshape(OPENCV_LUT_SIZE, 1)
    lut_bgr = cv2.applyColorMap(ramp, cv2_colormap)[:, 0, :]
    table = lut_bgr[:, ::-1].astype(np.float64) / 255.0
    return _resample(table, size)


@Colormap(ColormapChoice.GRAY)
def gray(size: int) -> np.ndarray:
    ramp = np.linspace(0.0, 1.0, size)
    return np.repeat(ramp[:, np.newaxis], 3, axis=1)


@Colormap(ColormapChoice.JET)
def jet(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_JET, size)


@Colormap(ColormapChoice.HOT)
def hot(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_HOT, size)


@Colormap(ColormapChoice.BONE)
def bone(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_BONE, size)


@Colormap(ColormapChoice.HSV)
def hsv(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_HSV, size)


@Colormap(ColormapChoice.COOL)
def cool(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_COOL, size)


@Colormap(ColormapChoice.SPRING)
def spring(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_SPRING, size)


@Colormap(ColormapChoice.SUMMER)
def summer(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_SUMMER, size)


@Colormap(ColormapChoice.AUTUMN)
def autumn(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_AUTUMN, size)


@Colormap(ColormapChoice.WINTER)
def winter(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_WINTER, size)


@Colormap(ColormapChoice.PINK)
def pink(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_PINK, size)


@Colormap(ColormapChoice.PARULA)
def parula(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_PARULA, size)


@Colormap(ColormapChoice.VIRIDIS)
def viridis(size: int) -> np.ndarray:
    return _opencv_table(cv2.COLORMAP_VIRIDIS, size)
