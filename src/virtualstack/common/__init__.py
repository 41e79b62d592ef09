from .enums import ColormapChoice, CounterPolicy
from .exceptions import (
    VirtualStackConfigurationException,
    VirtualStackDecodeException,
    VirtualStackDirectoryException,
    VirtualStackEmptyException,
    VirtualStackException,
    VirtualStackExhaustedException,
    VirtualStackMemoryException,
    VirtualStackNotFoundException,
    VirtualStackValidationException,
    VirtualStackWriteException,
)

__all__ = [
    "ColormapChoice",
    "CounterPolicy",
    "VirtualStackException",
    "VirtualStackNotFoundException",
    "VirtualStackEmptyException",
    "VirtualStackExhaustedException",
    "VirtualStackDecodeException",
    "VirtualStackWriteException",
    "VirtualStackValidationException",
    "VirtualStackConfigurationException",
    "VirtualStackMemoryException",
    "VirtualStackDirectoryException",
]
