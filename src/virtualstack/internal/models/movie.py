"""Movie frame assembly and video encoding."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ...common.exceptions import (
    VirtualStackEmptyException,
    VirtualStackValidationException,
    VirtualStackWriteException,
)
from ..config.base import MovieConfig
from .iterators import ImageIterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Frame:
    """Raw member pixels paired with the colormap used to display them."""

    cdata: np.ndarray
    colormap: np.ndarray

    def to_rgb(self) -> np.ndarray:
        """Render the frame as a uint8 RGB image.

        Single-channel data indexes into the colormap; colour data is used
        directly, rescaled to 8 bits and stripped of any alpha channel.
        """
        if self.cdata.ndim == 2:
            indices = np.clip(self.cdata, 0, len(self.colormap) - 1).astype(np.intp)
            return np.round(self.colormap[indices] * 255.0).astype(np.uint8)

        rgb = self.cdata[..., :3]
        if rgb.dtype == np.uint8:
            return rgb
        if np.issubdtype(rgb.dtype, np.integer):
            max_value = np.iinfo(rgb.dtype).max
            return np.round(rgb.astype(np.float64) * 255.0 / max_value).astype(np.uint8)
        return np.round(np.clip(rgb, 0.0, 1.0) * 255.0).astype(np.uint8)


def assemble_movie(images: ImageIterator, colormap: np.ndarray) -> list[Frame]:
    """Pair every member, in enumeration order, with ``colormap``."""
    frames = []
    for _ in range(images.length):
        frames.append(Frame(cdata=images.next(), colormap=colormap))

    logger.info(f"Assembled {len(frames)} movie frames")
    return frames


def write_movie(
    frames: list[Frame], path: Union[str, Path], config: MovieConfig
) -> Path:
    """Encode ``frames`` into a video container chosen by the path suffix.

    Args:
        frames: Frames in playback order
        path: Destination ``.avi`` or ``.mp4`` file
        config: Frame rate and codec settings

    Returns:
        The written path

    Raises:
        VirtualStackEmptyException: If there are no frames
        VirtualStackValidationException: If the suffix is not supported
        VirtualStackWriteException: If the video cannot be written
    """
    path = Path(path)
    fourcc_by_suffix = {".avi": config.avi_fourcc, ".mp4": config.mp4_fourcc}
    fourcc = fourcc_by_suffix.get(path.suffix.lower())
    if fourcc is None:
        raise VirtualStackValidationException(
            f"Unsupported movie format '{path.suffix}'. "
            f"Supported formats: {', '.join(fourcc_by_suffix)}"
        )
    if not frames:
        raise VirtualStackEmptyException("Cannot write a movie without frames")

    height, width = frames[0].cdata.shape[:2]
    writer = cv2.VideoWriter(
        str(path), cv2.VideoWriter_fourcc(*fourcc), config.fps, (width, height)
    )
    if not writer.isOpened():
        raise VirtualStackWriteException(f"Could not open video writer for {path}")

    try:
        for frame in frames:
            writer.write(cv2.cvtColor(frame.to_rgb(), cv2.COLOR_RGB2BGR))
    except cv2.error as e:
        raise VirtualStackWriteException(f"Failed to encode movie {path}: {e}") from e
    finally:
        writer.release()

    logger.info(f"Wrote {len(frames)} frames to {path} at {config.fps} fps")
    return path
