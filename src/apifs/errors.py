"""
Exceptions raised by apifs.

Remote API errors are deliberately not wrapped; whatever the API client
raises reaches the caller unchanged.
"""


class ApiFSError(Exception):
    """Base class for apifs errors."""


class ParseError(ApiFSError, ValueError):
    """A payload written to a creation file is not a JSON object."""

    def __init__(self, path, message):
        super().__init__(f"{path}: {message}")
        self.path = path
