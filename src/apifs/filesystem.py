"""
fsspec filesystem backed by a namespace router.

This module exposes a ``Directory`` tree (normally a ``NamespaceRouter``) as
an fsspec filesystem, so anything that speaks fsspec (or the patched file
operations in ``apifs.core``) can browse and write the remote API.
"""

import io
import logging

from fsspec import AbstractFileSystem
from fsspec.utils import stringify_path

from .atomic import PendingTextWrite, PendingWrite

logger = logging.getLogger(__name__)


class ApiFileSystem(AbstractFileSystem):
    """
    Read-mostly filesystem view of a remote resource API.

    Directories and files are whatever the wrapped router reports. Files are
    read whole; writable files accept one complete payload per open/close.
    """

    protocol = "apifs"
    root_marker = "/"
    cachable = False

    def __init__(self, router, **storage_options):
        """
        Initialize the filesystem.

        Parameters
        ----------
        router : Directory
            The directory tree to expose, usually a NamespaceRouter
        **storage_options : dict
            Passed through to fsspec.AbstractFileSystem
        """
        super().__init__(**storage_options)
        self.router = router

    @classmethod
    def _strip_protocol(cls, path):
        path = stringify_path(path)
        prefix = f"{cls.protocol}://"
        if path.startswith(prefix):
            path = path[len(prefix) :]
        return "/" + "/".join(part for part in path.split("/") if part)

    def _child(self, parent, name):
        return f"{parent.rstrip('/')}/{name}"

    def _listing_info(self, path):
        # Sizes of listed files would cost one remote fetch each; info() has them
        if self.router.is_directory(path):
            return {"name": path, "size": 0, "type": "directory"}
        return {"name": path, "size": None, "type": "file"}

    def ls(self, path, detail=True, **kwargs):
        path = self._strip_protocol(path)
        if self.router.is_directory(path):
            entries = [
                self._listing_info(self._child(path, name))
                for name in self.router.entries(path)
            ]
        elif self.router.is_file(path):
            entries = [self.info(path)]
        else:
            raise FileNotFoundError(path)

        if detail:
            return entries
        return [entry["name"] for entry in entries]

    def info(self, path, **kwargs):
        path = self._strip_protocol(path)
        if self.router.is_directory(path):
            return {"name": path, "size": 0, "type": "directory"}
        if self.router.is_file(path):
            return {"name": path, "size": len(self.router.read(path)), "type": "file"}
        raise FileNotFoundError(path)

    def exists(self, path, **kwargs):
        path = self._strip_protocol(path)
        return self.router.is_directory(path) or self.router.is_file(path)

    def isdir(self, path):
        return self.router.is_directory(self._strip_protocol(path))

    def isfile(self, path):
        return self.router.is_file(self._strip_protocol(path))

    def _check_readable(self, path):
        if self.router.is_directory(path):
            raise IsADirectoryError(path)
        if not self.router.is_file(path):
            raise FileNotFoundError(path)

    def _check_writable(self, path):
        if not self.router.can_write(path):
            raise PermissionError(f"{path} is read-only")

    def open(self, path, mode="rb", **kwargs):
        if "w" in mode and "b" not in mode:
            path = self._strip_protocol(path)
            self._check_writable(path)
            return PendingTextWrite(
                self.router,
                path,
                encoding=kwargs.get("encoding") or "utf-8",
                errors=kwargs.get("errors"),
                newline=kwargs.get("newline"),
            )
        if "b" not in mode:
            kwargs.setdefault("encoding", "utf-8")
        return super().open(path, mode, **kwargs)

    def _open(
        self,
        path,
        mode="rb",
        block_size=None,
        autocommit=True,
        cache_options=None,
        **kwargs,
    ):
        path = self._strip_protocol(path)
        if "r" in mode:
            self._check_readable(path)
            return io.BytesIO(self.router.read(path))
        if "w" not in mode or "+" in mode:
            raise ValueError(f"Unsupported mode {mode!r} for {path}")

        self._check_writable(path)
        logger.debug("opened %s for writing", path)
        return PendingWrite(self.router, path)

    def cat_file(self, path, start=None, end=None, **kwargs):
        path = self._strip_protocol(path)
        self._check_readable(path)
        return self.router.read(path)[start:end]

    def pipe_file(self, path, value, **kwargs):
        path = self._strip_protocol(path)
        self._check_writable(path)
        self.router.write(path, value)
