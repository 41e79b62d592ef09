"""Image codec helpers built on OpenCV."""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ...common.exceptions import (
    VirtualStackDecodeException,
    VirtualStackMemoryException,
    VirtualStackNotFoundException,
    VirtualStackWriteException,
)

logger = logging.getLogger(__name__)


class ImageUtils:
    """Utility class for encoding and decoding stack members with OpenCV."""

    @staticmethod
    def load_image(path: Union[str, Path]) -> np.ndarray:
        """Decode an image from disk, keeping its native bitdepth.

        Colour images are returned in RGB (or RGBA) channel order.

        Args:
            path: Path to the image file

        Returns:
            Decoded image array

        Raises:
            VirtualStackNotFoundException: If the file does not exist
            VirtualStackDecodeException: If OpenCV cannot decode the file
            VirtualStackMemoryException: If insufficient memory
        """
        path = Path(path)

        if not path.is_file():
            raise VirtualStackNotFoundException(f"Image file not found: {path}")

        try:
            img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        except MemoryError as e:
            raise VirtualStackMemoryException(
                f"Insufficient memory to load image {path}: {e}"
            ) from e
        except cv2.error as e:
            raise VirtualStackDecodeException(
                f"Could not decode image {path}: {e}"
            ) from e

        if img is None:
            raise VirtualStackDecodeException(f"Could not decode image {path}")

        return ImageUtils.bgr_to_rgb(img)

    @staticmethod
    def save_image(image: np.ndarray, path: Union[str, Path]) -> None:
        """Encode an image to disk; the codec is chosen from the file suffix.

        Args:
            image: Image array in grayscale, RGB or RGBA layout
            path: Destination path for the image

        Raises:
            VirtualStackWriteException: If the image cannot be written
            VirtualStackMemoryException: If insufficient memory
        """
        path = Path(path)
        image = np.asarray(image)

        if image.ndim not in (2, 3):
            raise VirtualStackWriteException(
                f"Cannot write {image.ndim}-dimensional array to {path}; "
                "expected a 2-D or 3-D image"
            )

        try:
            success = cv2.imwrite(str(path), ImageUtils.rgb_to_bgr(image))
        except MemoryError as e:
            raise VirtualStackMemoryException(
                f"Insufficient memory to save image {path}: {e}"
            ) from e
        except (cv2.error, OSError) as e:
            raise VirtualStackWriteException(
                f"Failed to save image to {path}: {e}"
            ) from e

        if not success:
            raise VirtualStackWriteException(f"Failed to save image to {path}")

    @staticmethod
    def bitdepth(image: np.ndarray) -> int:
        """Bits per channel of a decoded image."""
        return image.dtype.itemsize * 8

    @staticmethod
    def rgb_to_bgr(image: np.ndarray) -> np.ndarray:
        """Convert RGB(A) image to BGR(A) format; other layouts pass through.

        Args:
            image: Image array

        Returns:
            Image array in OpenCV channel order
        """
        if image.ndim == 3 and image.shape[2] == 3:
            return cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
        if image.ndim == 3 and image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)
        return image

    @staticmethod
    def bgr_to_rgb(image: np.ndarray) -> np.ndarray:
        """Convert BGR(A) image to RGB(A) format; other layouts pass through.

        Args:
            image: Image array in OpenCV channel order

        Returns:
            Image array in RGB(A) order
        """
        if image.ndim == 3 and image.shape[2] == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        if image.ndim == 3 and image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
        return image
