"""Configuration for virtual image stacks."""

from dataclasses import dataclass

from ...common.enums import CounterPolicy


@dataclass
class StackConfig:
    """Naming and lifecycle parameters for a virtual image stack."""

    name_prefix: str = "img"
    index_digits: int = 4
    counter_policy: CounterPolicy = CounterPolicy.RESUME
    check_resources: bool = True

    def member_name(self, index: int, extension: str) -> str:
        """Build the file name for the member at ``index``."""
        return f"{self.name_prefix}{index:0{self.index_digits}d}.{extension}"

    def glob_pattern(self, extension: str) -> str:
        return f"*.{extension}"


@dataclass
class MovieConfig:
    """Video container parameters for encoding assembled frames."""

    fps: float = 30.0
    avi_fourcc: str = "MJPG"
    mp4_fourcc: str = "mp4v"
