"""Resource monitoring utilities for memory and disk space management."""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

import numpy as np
import psutil

from ...common.exceptions import (
    VirtualStackDirectoryException,
    VirtualStackMemoryException,
)

logger = logging.getLogger(__name__)


class ResourceMonitor:
    """Check memory and disk headroom before stack operations."""

    MEMORY_WARNING_THRESHOLD = 0.85  # 85% memory usage
    MEMORY_CRITICAL_THRESHOLD = 0.95  # 95% memory usage
    DISK_WARNING_THRESHOLD = 0.90  # 90% disk usage
    DISK_CRITICAL_THRESHOLD = 0.98  # 98% disk usage
    MIN_FREE_DISK_GB = 0.1

    # sum accumulator plus the promoted copy of the current member
    ACCUMULATOR_COPIES = 2

    @staticmethod
    def get_memory_info() -> dict:
        """Get detailed memory information."""
        memory = psutil.virtual_memory()
        return {
            "total_gb": memory.total / (1024**3),
            "available_gb": memory.available / (1024**3),
            "used_gb": memory.used / (1024**3),
            "percent": memory.percent,
        }

    @staticmethod
    def get_disk_usage(path: Union[str, Path]) -> dict:
        """Get disk usage information for a specific path."""
        usage = shutil.disk_usage(Path(path))
        return {
            "total_gb": usage.total / (1024**3),
            "used_gb": usage.used / (1024**3),
            "free_gb": usage.free / (1024**3),
            "percent": (usage.used / usage.total) * 100,
        }

    @classmethod
    def check_memory_availability(
        cls,
        estimated_usage_gb: Optional[float] = None,
        warning_threshold: Optional[float] = None,
        critical_threshold: Optional[float] = None,
    ) -> None:
        """Check if sufficient memory is available.

        Args:
            estimated_usage_gb: Estimated additional memory needed in GB
            warning_threshold: Memory usage threshold for warnings (0.0-1.0)
            critical_threshold: Memory usage threshold for critical errors (0.0-1.0)

        Raises:
            VirtualStackMemoryException: If memory is critically low
        """
        warning_threshold = warning_threshold or cls.MEMORY_WARNING_THRESHOLD
        critical_threshold = critical_threshold or cls.MEMORY_CRITICAL_THRESHOLD

        memory_info = cls.get_memory_info()
        current_usage = memory_info["percent"] / 100.0

        if estimated_usage_gb:
            projected_usage = current_usage + estimated_usage_gb / memory_info["total_gb"]
            if projected_usage > critical_threshold:
                raise VirtualStackMemoryException(
                    f"Projected memory usage ({projected_usage:.1%}) would exceed "
                    f"critical threshold ({critical_threshold:.1%}). "
                    f"Available: {memory_info['available_gb']:.1f}GB, "
                    f"Estimated needed: {estimated_usage_gb:.1f}GB"
                )

        if current_usage > critical_threshold:
            raise VirtualStackMemoryException(
                f"Memory usage ({current_usage:.1%}) exceeds critical threshold "
                f"({critical_threshold:.1%}). Available: {memory_info['available_gb']:.1f}GB"
            )
        elif current_usage > warning_threshold:
            logger.warning(
                f"Memory usage ({current_usage:.1%}) is high. Available: {memory_info['available_gb']:.1f}GB"
            )

    @classmethod
    def check_disk_space(
        cls,
        path: Union[str, Path],
        estimated_usage_gb: Optional[float] = None,
        warning_threshold: Optional[float] = None,
        critical_threshold: Optional[float] = None,
        min_free_gb: Optional[float] = None,
    ) -> None:
        """Check if sufficient disk space is available.

        Args:
            path: Path to check disk space for
            estimated_usage_gb: Estimated additional disk space needed in GB
            warning_threshold: Disk usage threshold for warnings (0.0-1.0)
            critical_threshold: Disk usage threshold for critical errors (0.0-1.0)
            min_free_gb: Minimum free space required in GB

        Raises:
            VirtualStackDirectoryException: If disk space is critically low
        """
        warning_threshold = warning_threshold or cls.DISK_WARNING_THRESHOLD
        critical_threshold = critical_threshold or cls.DISK_CRITICAL_THRESHOLD
        min_free_gb = min_free_gb or cls.MIN_FREE_DISK_GB

        disk_info = cls.get_disk_usage(path)
        current_usage = disk_info["percent"] / 100.0
        free_gb = disk_info["free_gb"]

        if free_gb < min_free_gb:
            raise VirtualStackDirectoryException(
                f"Insufficient free disk space: {free_gb:.1f}GB available, "
                f"minimum required: {min_free_gb:.1f}GB"
            )

        if estimated_usage_gb and free_gb < estimated_usage_gb:
            raise VirtualStackDirectoryException(
                f"Insufficient free disk space: {free_gb:.1f}GB available, "
                f"estimated needed: {estimated_usage_gb:.1f}GB"
            )

        if current_usage > critical_threshold:
            raise VirtualStackDirectoryException(
                f"Disk usage ({current_usage:.1%}) exceeds critical threshold "
                f"({critical_threshold:.1%}). Free space: {free_gb:.1f}GB"
            )
        elif current_usage > warning_threshold:
            logger.warning(
                f"Disk usage ({current_usage:.1%}) is high. Free space: {free_gb:.1f}GB"
            )

    @classmethod
    def estimate_accumulator_memory(cls, shape: tuple[int, ...]) -> float:
        """Estimate memory held by a float64 running total of ``shape``.

        Returns:
            Estimated memory usage in GB
        """
        element_count = int(np.prod(shape, dtype=np.int64))
        total_bytes = element_count * np.dtype(np.float64).itemsize * cls.ACCUMULATOR_COPIES
        return total_bytes / (1024**3)

    @classmethod
    def log_resource_status(cls, context: str = "") -> None:
        """Log current resource status.

        Args:
            context: Context description for the log message
        """
        memory_info = cls.get_memory_info()
        logger.info(
            f"{context} - Memory: {memory_info['used_gb']:.1f}GB/{memory_info['total_gb']:.1f}GB "
            f"({memory_info['percent']:.1f}%), Available: {memory_info['available_gb']:.1f}GB"
        )


def check_resources_before_append(
    directory: Union[str, Path], image: np.ndarray
) -> None:
    """Check that ``directory`` has room for an uncompressed copy of ``image``.

    Raises:
        VirtualStackDirectoryException: If disk space is insufficient
    """
    estimated_disk_gb = image.nbytes / (1024**3)
    ResourceMonitor.check_disk_space(directory, estimated_disk_gb)


def check_resources_before_aggregate(shape: tuple[int, ...]) -> None:
    """Check that a float64 accumulator of ``shape`` fits in memory.

    Raises:
        VirtualStackMemoryException: If memory is insufficient
    """
    estimated_memory_gb = ResourceMonitor.estimate_accumulator_memory(shape)
    ResourceMonitor.check_memory_availability(estimated_memory_gb)
    ResourceMonitor.log_resource_status("Before aggregation")
