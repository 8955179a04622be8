"""
apifs: A remote resource API exposed as a virtual filesystem
============================================================

Collections of a list/get/create API become directories, objects become
read-only JSON files, and writing a JSON document to a collection's
``_create`` file creates a new object remotely.
"""

from .cache import ExpiringCache
from .collection import CollectionDirectory
from .config import ApiFSConfig, GoCardlessSettings, DEFAULT_COLLECTIONS
from .core import mounted, MountContext
from .errors import ApiFSError, ParseError
from .filesystem import ApiFileSystem
from .router import Directory, NamespaceRouter, split_path
from .utils import create_gocardless_client, create_path_mapper

__version__ = "0.1.0"

__all__ = [
    "ExpiringCache",
    "CollectionDirectory",
    "ApiFSConfig",
    "GoCardlessSettings",
    "DEFAULT_COLLECTIONS",
    "mounted",
    "MountContext",
    "ApiFSError",
    "ParseError",
    "ApiFileSystem",
    "Directory",
    "NamespaceRouter",
    "split_path",
    "create_gocardless_client",
    "create_path_mapper",
]
