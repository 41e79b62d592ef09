class VirtualStackException(Exception):
    """Base exception for virtual image stacks."""

    pass


class VirtualStackNotFoundException(VirtualStackException):
    """Exception raised when a stack directory or member file is missing."""

    pass


class VirtualStackEmptyException(VirtualStackException):
    """Exception raised when an operation needs at least one member."""

    pass


class VirtualStackExhaustedException(VirtualStackException):
    """Exception raised when an iterator is advanced past its end."""

    pass


class VirtualStackDecodeException(VirtualStackException):
    """Exception raised when a member cannot be decoded."""

    pass


class VirtualStackWriteException(VirtualStackException):
    """Exception raised when an image or movie cannot be written."""

    pass


class VirtualStackValidationException(VirtualStackException):
    """Exception raised when a validation error occurs."""

    pass


class VirtualStackConfigurationException(VirtualStackException):
    """Exception raised when configuration parameters are unsupported."""

    pass


class VirtualStackMemoryException(VirtualStackException):
    """Exception raised when memory or resource limits are exceeded."""

    pass


class VirtualStackDirectoryException(VirtualStackException):
    """Exception raised when directory operations fail."""

    pass
