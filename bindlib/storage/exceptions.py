"""Exception classes for binding library storage."""


class BindingLibraryError(Exception):
    """Base exception for binding library errors."""

    pass


class InvalidLibraryIdError(BindingLibraryError, ValueError):
    """Raised when a library is constructed without an identifier."""

    def __init__(self, library_id: str | None = None):
        """Initialize with the rejected identifier."""
        self.library_id = library_id
        super().__init__(f"Library id can't be null or empty: {library_id!r}")


class MalformedLibraryError(BindingLibraryError):
    """Raised when stored library data cannot be decoded."""

    def __init__(self, library_id: str, details: str = ""):
        """Initialize with library id and decoder details."""
        self.library_id = library_id
        message = f"Malformed data for library {library_id}"
        if details:
            message += f": {details}"
        super().__init__(message)


class StorageMediumError(BindingLibraryError):
    """Raised when the durable medium rejects a read, write or delete."""

    def __init__(self, location: str, details: str = ""):
        """Initialize with the medium location and details."""
        self.location = location
        message = f"Storage medium failure at {location}"
        if details:
            message += f": {details}"
        super().__init__(message)
