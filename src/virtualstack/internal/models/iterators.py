"""Snapshot iterators over the members of a stack directory."""

import logging
from pathlib import Path
from typing import Union

import numpy as np

from ...common.exceptions import (
    VirtualStackExhaustedException,
    VirtualStackNotFoundException,
)
from ..util.image import ImageUtils

logger = logging.getLogger(__name__)


def list_files(directory: Union[str, Path], pattern: str) -> list[Path]:
    """List regular files in ``directory`` matching ``pattern``, sorted by name.

    Args:
        directory: Directory to scan (not recursive)
        pattern: Glob pattern such as ``*.png``

    Returns:
        Matching paths in lexicographic file name order

    Raises:
        VirtualStackNotFoundException: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise VirtualStackNotFoundException(f"Stack directory not found: {directory}")

    return sorted(
        (path for path in directory.glob(pattern) if path.is_file()),
        key=lambda path: path.name,
    )


class FileIterator:
    """Forward-only cursor over the member paths present at creation time."""

    def __init__(self, directory: Union[str, Path], pattern: str) -> None:
        self._paths: tuple[Path, ...] = tuple(list_files(directory, pattern))
        self._cursor = 0

    @property
    def length(self) -> int:
        return len(self._paths)

    @property
    def position(self) -> int:
        """Number of members consumed so far."""
        return self._cursor

    def more(self) -> bool:
        return self._cursor < len(self._paths)

    def next(self) -> Path:
        if not self.more():
            raise VirtualStackExhaustedException(
                f"Iterator exhausted after {self.length} members"
            )
        path = self._paths[self._cursor]
        self._cursor += 1
        return path

    def __len__(self) -> int:
        return self.length

    def __iter__(self):
        return self

    def __next__(self):
        if not self.more():
            raise StopIteration
        return self.next()


class ImageIterator(FileIterator):
    """Forward-only cursor that decodes one member per ``next()`` call.

    The file list is captured at creation; members removed afterwards fail
    on their turn instead of shrinking ``length``.
    """

    def next(self) -> np.ndarray:
        path = super().next()
        logger.debug(f"Decoding member {self.position}/{self.length}: {path}")
        return ImageUtils.load_image(path)
