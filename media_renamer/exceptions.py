"""
Custom exception hierarchy for the media renamer.

Only structural problems (a bad source root) are allowed to reach the
process boundary; everything else is contained within a single file.
"""


class MediaRenamerError(Exception):
    """Base exception for all media renamer errors."""
    pass


class InvalidPathError(MediaRenamerError):
    """Raised when the source or destination root cannot be used."""
    pass


class MetadataExtractionError(MediaRenamerError):
    """Raised when metadata cannot be extracted from a file."""
    pass


class FileOperationError(MediaRenamerError):
    """Raised when a destination directory cannot be prepared."""
    pass
