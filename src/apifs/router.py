"""
Top-level namespace of the virtual filesystem.

This module defines the ``Directory`` interface shared by every level of
the tree and the router that dispatches the first path segment to the
matching collection directory.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def split_path(path: str) -> Tuple[str, str]:
    """
    Split a rooted path into its first segment and the remainder.

    Parameters
    ----------
    path : str
        A ``/``-rooted path; repeated and trailing slashes are ignored

    Returns
    -------
    tuple
        (first, remainder) where remainder is ``""`` when the path names the
        first segment itself, and otherwise starts with ``/``

    Examples
    --------
    >>> split_path("/customers/CU123")
    ('customers', '/CU123')
    >>> split_path("/customers/")
    ('customers', '')
    >>> split_path("/")
    ('', '')
    """
    parts = [part for part in path.split("/") if part]
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], "/" + "/".join(parts[1:])


class Directory(ABC):
    """
    The operations a filesystem bridge needs from a directory.

    Query methods must answer for any path without raising; an unknown path
    is simply not a file and not a directory.
    """

    @abstractmethod
    def entries(self, path: str) -> List[str]:
        """Names listed in the directory at ``path``."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Whether ``path`` is a readable file."""

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        """Whether ``path`` is a directory."""

    @abstractmethod
    def can_write(self, path: str) -> bool:
        """Whether ``path`` accepts writes."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Contents of the file at ``path``."""

    @abstractmethod
    def write(self, path: str, content: bytes):
        """Replace the contents of the file at ``path``."""


class NamespaceRouter(Directory):
    """
    Route each path to the directory named by its first segment.

    The root lists the configured names in order; everything below a name
    is handed to that name's directory with the leading segment removed.
    """

    def __init__(self, directories: Dict[str, Directory]):
        """
        Initialize the router.

        Parameters
        ----------
        directories : dict
            Ordered mapping of top-level name to ``Directory``
        """
        self._directories = dict(directories)

    @classmethod
    def from_config(cls, config):
        """
        Build a router with one collection directory per configured collection.

        Parameters
        ----------
        config : ApiFSConfig
            The collections to expose and their cache TTL

        Returns
        -------
        NamespaceRouter
        """
        from .collection import CollectionDirectory

        return cls(
            {
                name: CollectionDirectory(service, ttl=config.ttl)
                for name, service in config.collections.items()
            }
        )

    @property
    def names(self) -> List[str]:
        return list(self._directories)

    def _resolve(self, path) -> Tuple[Optional[Directory], str]:
        name, remainder = split_path(path)
        directory = self._directories.get(name)
        logger.debug("resolved %s to %r with remainder %r", path, name, remainder)
        return directory, remainder

    def _is_root(self, path):
        return split_path(path)[0] == ""

    def entries(self, path):
        if self._is_root(path):
            return self.names
        directory, remainder = self._resolve(path)
        if directory is None:
            return []
        return directory.entries(remainder)

    def is_file(self, path):
        if self._is_root(path):
            return False
        directory, remainder = self._resolve(path)
        if directory is None:
            return False
        return directory.is_file(remainder)

    def is_directory(self, path):
        if self._is_root(path):
            return True
        directory, remainder = self._resolve(path)
        if directory is None:
            return False
        if not remainder:
            return True
        return directory.is_directory(remainder)

    def can_write(self, path):
        if self._is_root(path):
            return False
        directory, remainder = self._resolve(path)
        # Collection directories themselves are read-only
        if directory is None or not remainder:
            return False
        return directory.can_write(remainder)

    def _file_target(self, path):
        if self._is_root(path):
            raise IsADirectoryError(path)
        directory, remainder = self._resolve(path)
        if directory is None:
            raise FileNotFoundError(path)
        if not remainder:
            raise IsADirectoryError(path)
        return directory, remainder

    def read(self, path):
        directory, remainder = self._file_target(path)
        return directory.read(remainder)

    def write(self, path, content):
        directory, remainder = self._file_target(path)
        logger.debug("writing %d bytes to %s", len(content), path)
        return directory.write(remainder, content)
