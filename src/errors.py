"""Custom exceptions for deplicense."""


class DepLicenseError(Exception):
    """Base exception for all deplicense errors."""


class UnsupportedFormatError(DepLicenseError):
    """Raised when a report is requested in a format the renderer does not know."""

    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(
            f'Unsupported format "{fmt}".  See help for supported formats.'
        )


class ProjectLoadError(DepLicenseError):
    """Raised when a project manifest or lockfile is missing or cannot be parsed."""
