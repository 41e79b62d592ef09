"""Unit tests for ImageUtils class."""

from pathlib import Path
from unittest.mock import patch

import cv2
import numpy as np
import pytest

from virtualstack.common.exceptions import (
    VirtualStackDecodeException,
    VirtualStackNotFoundException,
    VirtualStackWriteException,
)
from virtualstack.internal.util.image import ImageUtils


class TestImageUtilsLoad:
    """Test decoding."""

    def test_missing_file_raises_not_found(self, temp_dir: Path) -> None:
        """Test that a missing file is distinguished from a corrupt one."""
        with pytest.raises(VirtualStackNotFoundException):
            ImageUtils.load_image(temp_dir / "missing.png")

    def test_corrupt_file_raises_decode_error(self, temp_dir: Path) -> None:
        """Test that unreadable content raises a decode error."""
        path = temp_dir / "corrupt.png"
        path.write_bytes(b"\x89PNG but not really")

        with pytest.raises(VirtualStackDecodeException):
            ImageUtils.load_image(path)

    def test_opencv_error_raises_decode_error(self, temp_dir: Path) -> None:
        """Test that codec exceptions are converted."""
        path = temp_dir / "img.png"
        ImageUtils.save_image(np.zeros((2, 2), dtype=np.uint8), path)

        with patch(
            "virtualstack.internal.util.image.cv2.imread",
            side_effect=cv2.error("boom"),
        ):
            with pytest.raises(VirtualStackDecodeException):
                ImageUtils.load_image(path)


class TestImageUtilsSave:
    """Test encoding."""

    def test_rgba_round_trip(self, temp_dir: Path) -> None:
        """Test that four-channel images keep RGBA order."""
        image = np.zeros((2, 2, 4), dtype=np.uint8)
        image[..., 0] = 200
        image[..., 3] = 255
        path = temp_dir / "rgba.png"

        ImageUtils.save_image(image, path)

        np.testing.assert_array_equal(ImageUtils.load_image(path), image)

    def test_wrong_dimensions_raise(self, temp_dir: Path) -> None:
        """Test that arrays that are not images cannot be written."""
        with pytest.raises(VirtualStackWriteException):
            ImageUtils.save_image(np.zeros(4, dtype=np.uint8), temp_dir / "bad.png")

    def test_missing_parent_directory_raises(self, temp_dir: Path) -> None:
        """Test that OpenCV refusing to write surfaces as a write error."""
        with pytest.raises(VirtualStackWriteException):
            ImageUtils.save_image(
                np.zeros((2, 2), dtype=np.uint8), temp_dir / "missing" / "img.png"
            )


class TestImageUtilsBitdepth:
    """Test bitdepth derivation."""

    def test_bitdepth_from_dtype(self) -> None:
        """Test bits per channel for common dtypes."""
        assert ImageUtils.bitdepth(np.zeros((1, 1), dtype=np.uint8)) == 8
        assert ImageUtils.bitdepth(np.zeros((1, 1, 3), dtype=np.uint16)) == 16
        assert ImageUtils.bitdepth(np.zeros((1, 1), dtype=np.float32)) == 32
