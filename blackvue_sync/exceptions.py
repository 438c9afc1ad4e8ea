"""
Custom exception hierarchy for the BlackVue sync tool.

Fatal errors carry the process exit code used by the CLI; per-file
transfer problems are recorded on the run outcome instead of raised.
"""


class BlackVueSyncError(Exception):
    """Base exception for all sync errors."""
    exit_code = 1


class ConfigurationError(BlackVueSyncError):
    """Raised when the IP or target directory is missing or unusable."""
    exit_code = 1


class DeviceConnectionError(BlackVueSyncError):
    """Raised when the video list cannot be fetched from the dashcam."""
    exit_code = 2


class ManifestError(BlackVueSyncError):
    """Raised when the video list from the dashcam cannot be understood."""
    exit_code = 3


class ManifestVersionError(ManifestError):
    """Raised when the list version tag is not one we know."""
    pass


class ManifestParseError(ManifestError):
    """Raised when a list entry has no usable path or recording date."""
    pass


class PartitionError(BlackVueSyncError):
    """Raised when a date subdirectory cannot be created."""
    exit_code = 4


class TransferError(BlackVueSyncError):
    """Raised inside the executor when a single download fails."""
    pass
