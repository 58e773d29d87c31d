"""Exceptions raised by the scan pipeline.

Everything deriving from :class:`HScanError` is fatal for a run: the CLI logs
it, removes the temp directory if one was created and exits with status 1.
"""


class HScanError(RuntimeError):
    """Base class for errors that terminate a scan run."""


class DirectoryProvisioningError(HScanError):
    """Raised when a required directory cannot be created or accessed."""

    def __init__(self, path, label: str = "directory"):
        self.path = path
        self.label = label
        super().__init__(f"Failed to create or access the {label} at '{path}'.")


class ScanAcquisitionError(HScanError):
    """Raised when the scanner command exits with a non-zero status."""

    def __init__(self, returncode: int, output: str = ""):
        self.returncode = returncode
        self.output = output
        message = f"Scan unsuccessful (exit code {returncode})."
        if output:
            message += f" {output.strip()}"
        super().__init__(message)


class InvalidWaitError(HScanError, ValueError):
    """Raised for a countdown value that is not a non-negative integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Wait time must be a non-negative whole number of seconds, got '{value}'.")


class InvalidFilenameError(ValueError):
    """Raised by the filename validator; carries the rejection reason."""
