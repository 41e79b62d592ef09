import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .common.enums import ColormapChoice, CounterPolicy
from .common.exceptions import (
    VirtualStackDirectoryException,
    VirtualStackEmptyException,
    VirtualStackNotFoundException,
    VirtualStackValidationException,
)
from .internal.config.base import MovieConfig, StackConfig
from .internal.models.aggregate import mean_images, sum_images
from .internal.models.factory import ColormapFactory
from .internal.models.iterators import FileIterator, ImageIterator
from .internal.models.movie import Frame, assemble_movie, write_movie
from .internal.models.validation import CropRectValidation, StackInputValidation
from .internal.util.image import ImageUtils
from .internal.util.resource_monitor import (
    check_resources_before_aggregate,
    check_resources_before_append,
)

logger = logging.getLogger(__name__)


class VirtualImageStack:
    """An ordered stack of same-sized images kept on disk, one file per image.

    Every file in ``directory`` ending in ``.extension`` is a member of the
    stack; membership is always re-read from the filesystem. Members are
    written as ``img0000.<extension>``, ``img0001.<extension>``, ...

    Only one writer may use a directory at a time: the append counter lives
    in this object and is not coordinated across instances or processes.

    Example:
        stack = VirtualImageStack("my/directory", "png")
        stack.append(np.zeros((480, 640), dtype=np.uint8))
        average = stack.mean()
    """

    def __init__(
        self,
        directory: Union[str, Path],
        extension: str,
        config: Optional[StackConfig] = None,
    ) -> None:
        validated_input = StackInputValidation(directory=directory, extension=extension)

        self._directory = Path(validated_input.directory)
        self._extension = validated_input.extension
        self._config = config or StackConfig()
        self._crop_rect: Optional[tuple[int, int, int, int]] = None

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VirtualStackDirectoryException(
                f"Failed to create stack directory {self._directory}: {e}"
            ) from e

        if self._config.counter_policy is CounterPolicy.RESUME:
            self._count = self._next_free_index()
        else:
            self._count = 0

        logger.info(
            f"Opened stack {self._directory} (*.{self._extension}), "
            f"next member index {self._count}"
        )

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def folder(self) -> str:
        """Name of the lowest directory in the stack path."""
        return self._directory.resolve().name

    @property
    def extension(self) -> str:
        return self._extension

    @property
    def count(self) -> int:
        """Index the next appended member will be named with."""
        return self._count

    @property
    def crop_rect(self) -> Optional[tuple[int, int, int, int]]:
        return self._crop_rect

    def append(self, image: np.ndarray) -> str:
        """Write ``image`` as the next member and return its file name."""
        image = np.asarray(image)
        if self._config.check_resources:
            check_resources_before_append(self._directory, image)

        img_name = self._next_name()
        ImageUtils.save_image(image, self._directory / img_name)
        self._count += 1

        logger.debug(f"Appended {img_name} to {self._directory}")
        return img_name

    def append_batch(self, images: np.ndarray, axis: int = 2) -> list[str]:
        """Append every slice of ``images`` along ``axis``, in axis order.

        Example:
            stack.append_batch(np.ones((800, 600, 10), dtype=np.uint8))
        """
        images = np.asarray(images)
        if images.ndim < 3:
            raise VirtualStackValidationException(
                f"Expected an array with a stacking axis, got shape {images.shape}"
            )

        return [
            self.append(np.take(images, index, axis=axis))
            for index in range(images.shape[axis])
        ]

    def length(self) -> int:
        """Number of members currently on disk."""
        return self.create_iterator().length

    def __len__(self) -> int:
        return self.length()

    def shape(self) -> tuple[int, ...]:
        """Dimensions of the first member."""
        return tuple(self._first_image().shape)

    def bitdepth(self) -> int:
        """Bits per channel of the first member."""
        return ImageUtils.bitdepth(self._first_image())

    def test_image(self) -> Optional[np.ndarray]:
        """Decode the first member, or return None for an empty stack."""
        images = self.create_iterator()
        if images.more():
            return images.next()
        return None

    def clear(self) -> None:
        """Delete all members and reset the append counter."""
        files = self.create_file_iterator()
        logger.info(f"Clearing {files.length} members from {self._directory}")

        while files.more():
            path = files.next()
            try:
                path.unlink()
            except FileNotFoundError as e:
                raise VirtualStackNotFoundException(
                    f"Member {path} disappeared before it could be deleted"
                ) from e
            except OSError as e:
                raise VirtualStackDirectoryException(
                    f"Failed to delete member {path}: {e}"
                ) from e
        self._count = 0

    def set_crop(self, rect: Iterable[int]) -> None:
        """Store a crop rectangle ``(x, y, width, height)``.

        The rectangle is kept for future read-time cropping; neither the
        files on disk nor any decoded member is affected by it.
        """
        self._crop_rect = CropRectValidation(rect=tuple(rect)).rect

    def sum(self, mask: Optional[Iterable[int]] = None) -> np.ndarray:
        """Sum the members as float64.

        Args:
            mask: 1-based positions of the members to include; all members
                when omitted
        """
        if self._config.check_resources:
            check_resources_before_aggregate(self.shape())
        return sum_images(self.create_iterator(), mask)

    def mean(self, mask: Optional[Iterable[int]] = None) -> np.ndarray:
        """Sum the masked members and divide by the length of the whole stack.

        With a mask the divisor is still the total number of members.
        """
        length = self.length()
        if self._config.check_resources:
            check_resources_before_aggregate(self.shape())
        return mean_images(self.create_iterator(), length, mask)

    def movie(self, colormap: Union[str, ColormapChoice] = "gray") -> list[Frame]:
        """Assemble one frame per member using a colormap sized to the bitdepth.

        Example:
            frames = stack.movie("jet")
            rgb = [frame.to_rgb() for frame in frames]
        """
        colormap_table = ColormapFactory.for_bitdepth(colormap, self.bitdepth())
        return assemble_movie(self.create_iterator(), colormap_table)

    def save_movie(
        self,
        path: Union[str, Path],
        colormap: Union[str, ColormapChoice] = "gray",
        config: Optional[MovieConfig] = None,
    ) -> Path:
        """Assemble the movie and encode it to an ``.avi`` or ``.mp4`` file."""
        return write_movie(self.movie(colormap), path, config or MovieConfig())

    def create_iterator(self) -> ImageIterator:
        return ImageIterator(self._directory, self._glob_pattern())

    def create_file_iterator(self) -> FileIterator:
        return FileIterator(self._directory, self._glob_pattern())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(directory={str(self._directory)!r}, "
            f"extension={self._extension!r})"
        )

    def _glob_pattern(self) -> str:
        return self._config.glob_pattern(self._extension)

    def _next_name(self) -> str:
        return self._config.member_name(self._count, self._extension)

    def _first_image(self) -> np.ndarray:
        img = self.test_image()
        if img is None:
            raise VirtualStackEmptyException(
                f"Stack {self._directory} has no *.{self._extension} members"
            )
        return img

    def _next_free_index(self) -> int:
        """One past the highest index among existing members named by this stack."""
        member_name = re.compile(
            rf"^{re.escape(self._config.name_prefix)}(\d+)\.{re.escape(self._extension)}$"
        )
        next_index = 0
        for path in self.create_file_iterator():
            match = member_name.match(path.name)
            if match:
                next_index = max(next_index, int(match.group(1)) + 1)
        return next_index
