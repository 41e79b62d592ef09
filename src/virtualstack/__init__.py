"""Virtual Image Stack - disk-backed image stacks with streaming statistics."""

from .stack import VirtualImageStack

__version__ = "0.1.0"
__all__ = ["VirtualImageStack"]
