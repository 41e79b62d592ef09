"""Pytest configuration and shared fixtures."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import numpy as np
import pytest

from virtualstack import VirtualImageStack


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory(prefix="test_virtual_stack_") as tmp:
        yield Path(tmp)


@pytest.fixture
def stack_dir(temp_dir: Path) -> Path:
    """Directory that will hold the stack members (not created yet)."""
    return temp_dir / "stack"


@pytest.fixture
def stack(stack_dir: Path) -> VirtualImageStack:
    """Empty PNG stack."""
    return VirtualImageStack(stack_dir, "png")


@pytest.fixture
def constant_images() -> list[np.ndarray]:
    """Three 2x2 single-channel images with constant values 1, 2 and 3."""
    return [np.full((2, 2), value, dtype=np.uint8) for value in (1, 2, 3)]


@pytest.fixture
def filled_stack(
    stack: VirtualImageStack, constant_images: list[np.ndarray]
) -> VirtualImageStack:
    """PNG stack holding the constant images in order."""
    for image in constant_images:
        stack.append(image)
    return stack
