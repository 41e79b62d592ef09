"""Unit tests for ResourceMonitor class."""

from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import pytest

from virtualstack.common.exceptions import (
    VirtualStackDirectoryException,
    VirtualStackMemoryException,
)
from virtualstack.internal.util.resource_monitor import (
    ResourceMonitor,
    check_resources_before_aggregate,
    check_resources_before_append,
)


def _memory_info(percent: float, total_gb: float = 16.0) -> dict:
    used_gb = total_gb * percent / 100.0
    return {
        "total_gb": total_gb,
        "available_gb": total_gb - used_gb,
        "used_gb": used_gb,
        "percent": percent,
    }


def _disk_info(percent: float, total_gb: float = 100.0) -> dict:
    used_gb = total_gb * percent / 100.0
    return {
        "total_gb": total_gb,
        "used_gb": used_gb,
        "free_gb": total_gb - used_gb,
        "percent": percent,
    }


class TestResourceMonitorMemory:
    """Test memory monitoring functionality."""

    @patch("virtualstack.internal.util.resource_monitor.psutil.virtual_memory")
    def test_get_memory_info(self, mock_virtual_memory: Mock) -> None:
        """Test getting detailed memory information."""
        mock_memory = Mock()
        mock_memory.total = 16 * 1024**3
        mock_memory.available = 8 * 1024**3
        mock_memory.used = 8 * 1024**3
        mock_memory.percent = 50.0
        mock_virtual_memory.return_value = mock_memory

        info = ResourceMonitor.get_memory_info()

        assert info["total_gb"] == 16.0
        assert info["available_gb"] == 8.0
        assert info["used_gb"] == 8.0
        assert info["percent"] == 50.0

    @patch(
        "virtualstack.internal.util.resource_monitor.ResourceMonitor.get_memory_info"
    )
    def test_memory_availability_success(self, mock_get_memory_info: Mock) -> None:
        """Test successful memory availability check."""
        mock_get_memory_info.return_value = _memory_info(25.0)

        ResourceMonitor.check_memory_availability(estimated_usage_gb=2.0)

        mock_get_memory_info.assert_called_once()

    @patch(
        "virtualstack.internal.util.resource_monitor.ResourceMonitor.get_memory_info"
    )
    def test_memory_warning_threshold_exceeded(
        self, mock_get_memory_info: Mock
    ) -> None:
        """Test that high memory usage only logs a warning."""
        mock_get_memory_info.return_value = _memory_info(90.0)

        with patch("virtualstack.internal.util.resource_monitor.logger") as mock_logger:
            ResourceMonitor.check_memory_availability()

        mock_logger.warning.assert_called_once()
        assert "Memory usage (90.0%) is high" in mock_logger.warning.call_args[0][0]

    @patch(
        "virtualstack.internal.util.resource_monitor.ResourceMonitor.get_memory_info"
    )
    def test_memory_critical_threshold_exceeded(
        self, mock_get_memory_info: Mock
    ) -> None:
        """Test memory critical threshold exceeded."""
        mock_get_memory_info.return_value = _memory_info(96.0)

        with pytest.raises(VirtualStackMemoryException) as exc_info:
            ResourceMonitor.check_memory_availability()

        assert "exceeds critical threshold" in str(exc_info.value)

    @patch(
        "virtualstack.internal.util.resource_monitor.ResourceMonitor.get_memory_info"
    )
    def test_estimated_memory_projection_exceeds_critical(
        self, mock_get_memory_info: Mock
    ) -> None:
        """Test that a large accumulator estimate is refused."""
        mock_get_memory_info.return_value = _memory_info(70.0)

        with pytest.raises(VirtualStackMemoryException) as exc_info:
            ResourceMonitor.check_memory_availability(estimated_usage_gb=8.0)

        assert "Projected memory usage" in str(exc_info.value)

    def test_estimate_accumulator_memory(self) -> None:
        """Test the float64 accumulator estimate for a 1024x1024 image."""
        estimate = ResourceMonitor.estimate_accumulator_memory((1024, 1024))

        assert estimate == pytest.approx(2 * 8 / 1024)


class TestResourceMonitorDisk:
    """Test disk monitoring functionality."""

    def test_get_disk_usage(self, temp_dir: Path) -> None:
        """Test getting disk usage for a real path."""
        info = ResourceMonitor.get_disk_usage(temp_dir)

        assert info["total_gb"] > 0
        assert 0 <= info["percent"] <= 100

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.get_disk_usage")
    def test_disk_space_success(self, mock_get_disk_usage: Mock) -> None:
        """Test successful disk space check."""
        mock_get_disk_usage.return_value = _disk_info(50.0)

        ResourceMonitor.check_disk_space("/tmp", estimated_usage_gb=1.0)

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.get_disk_usage")
    def test_insufficient_free_space(self, mock_get_disk_usage: Mock) -> None:
        """Test that less free space than the estimate is refused."""
        mock_get_disk_usage.return_value = _disk_info(50.0, total_gb=2.0)

        with pytest.raises(VirtualStackDirectoryException) as exc_info:
            ResourceMonitor.check_disk_space("/tmp", estimated_usage_gb=5.0)

        assert "estimated needed" in str(exc_info.value)

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.get_disk_usage")
    def test_below_minimum_free_space(self, mock_get_disk_usage: Mock) -> None:
        """Test the minimum free space floor."""
        mock_get_disk_usage.return_value = {
            "total_gb": 100.0,
            "used_gb": 99.95,
            "free_gb": 0.05,
            "percent": 99.95,
        }

        with pytest.raises(VirtualStackDirectoryException) as exc_info:
            ResourceMonitor.check_disk_space("/tmp")

        assert "minimum required" in str(exc_info.value)

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.get_disk_usage")
    def test_disk_warning_threshold(self, mock_get_disk_usage: Mock) -> None:
        """Test that a nearly full disk only logs a warning."""
        mock_get_disk_usage.return_value = _disk_info(95.0)

        with patch("virtualstack.internal.util.resource_monitor.logger") as mock_logger:
            ResourceMonitor.check_disk_space("/tmp")

        mock_logger.warning.assert_called_once()


class TestResourceChecks:
    """Test the pre-operation check helpers."""

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.check_disk_space")
    def test_check_before_append_uses_image_size(
        self, mock_check_disk_space: Mock, temp_dir: Path
    ) -> None:
        """Test that the raw image size is used as the disk estimate."""
        image = np.zeros((1024, 1024), dtype=np.uint8)

        check_resources_before_append(temp_dir, image)

        mock_check_disk_space.assert_called_once_with(temp_dir, 1 / 1024)

    @patch("virtualstack.internal.util.resource_monitor.ResourceMonitor.log_resource_status")
    @patch(
        "virtualstack.internal.util.resource_monitor.ResourceMonitor.check_memory_availability"
    )
    def test_check_before_aggregate(
        self, mock_check_memory: Mock, mock_log_status: Mock
    ) -> None:
        """Test that the accumulator estimate drives the memory check."""
        check_resources_before_aggregate((1024, 1024))

        mock_check_memory.assert_called_once_with(pytest.approx(2 * 8 / 1024))
        mock_log_status.assert_called_once_with("Before aggregation")
