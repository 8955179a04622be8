"""
In-process mounting of an apifs filesystem.

This module provides the context manager that patches Python's file
operations so that paths under a mount point are served by an
``ApiFileSystem`` while every other path behaves as usual.
"""

import builtins
import functools
import logging
import os
import posixpath
from contextlib import contextmanager

from fsspec import AbstractFileSystem

from .filesystem import ApiFileSystem
from .utils import create_path_mapper

logger = logging.getLogger(__name__)


class MountContext:
    """
    Context manager redirecting file operations under a mount point.

    While active, ``open``, ``os.listdir`` and the ``os.path`` existence and
    size checks answer paths below ``mount_point`` from ``fs``.
    """

    def __init__(self, fs, mount_point, patch_open=True, patch_os=True):
        """
        Initialize a mount context.

        Parameters
        ----------
        fs : ApiFileSystem
            The filesystem serving the mounted paths
        mount_point : str
            Local path prefix under which the filesystem appears
        patch_open : bool, default True
            Whether to patch the built-in open function
        patch_os : bool, default True
            Whether to patch os and os.path functions
        """
        self.fs = fs
        self.mount_point = mount_point
        self._path_mapper = create_path_mapper(mount_point)

        self.patch_open = patch_open
        self.patch_os = patch_os

        # Keep track of original functions
        self._originals = {}

    def __enter__(self):
        self._patch_operations()
        logger.info("mounted %s on %s", self.fs.protocol, self.mount_point)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._restore_operations()
        logger.info("unmounted %s", self.mount_point)

    def map_path(self, path, operation="default"):
        """
        Check if a path is under the mount point and map it into the filesystem.

        Parameters
        ----------
        path : str or os.PathLike
            The local path being operated on
        operation : str
            The name of the operation being performed

        Returns
        -------
        tuple
            (should_patch, mapped_path)
        """
        if isinstance(path, os.PathLike):
            path = os.fspath(path)
        if not isinstance(path, str):
            return False, path
        return self._path_mapper(path, operation)

    def _patch_operations(self):
        if self.patch_open:
            self._patch_open()
        if self.patch_os:
            self._patch_os_functions()

    def _restore_operations(self):
        for target, attr_name, original in self._originals.values():
            setattr(target, attr_name, original)
        self._originals = {}

    def _patch_function(self, target, attr_name, replacement):
        original = getattr(target, attr_name)
        self._originals[(id(target), attr_name)] = (target, attr_name, original)
        setattr(target, attr_name, replacement)

    def _patch_open(self):
        original_open = builtins.open
        fs = self.fs
        map_path = self.map_path

        @functools.wraps(original_open)
        def patched_open(
            file, mode="r", buffering=-1, encoding=None, errors=None, newline=None,
            *args, **kwargs
        ):
            should_patch, mapped_path = map_path(file, "open")
            if should_patch:
                text_kwargs = {
                    key: value
                    for key, value in (
                        ("encoding", encoding),
                        ("errors", errors),
                        ("newline", newline),
                    )
                    if value is not None
                }
                return fs.open(mapped_path, mode, **text_kwargs)
            return original_open(
                file, mode, buffering, encoding, errors, newline, *args, **kwargs
            )

        self._patch_function(builtins, "open", patched_open)

    def _patch_os_functions(self):
        for func_name in ["exists", "isdir", "isfile", "getsize"]:
            self._patch_redirect(os.path, func_name, f"os.path.{func_name}")
        self._patch_redirect(os, "listdir", "os.listdir")

    def _patch_redirect(self, target, func_name, operation):
        original_func = getattr(target, func_name)
        handler = getattr(self, f"_{operation.replace('.', '_')}")

        @functools.wraps(original_func)
        def patched_func(path, *args, **kwargs):
            should_patch, mapped_path = self.map_path(path, operation)
            if should_patch:
                return handler(mapped_path)
            return original_func(path, *args, **kwargs)

        self._patch_function(target, func_name, patched_func)

    # os semantics on top of the filesystem

    def _os_path_exists(self, path):
        return self.fs.exists(path)

    def _os_path_isdir(self, path):
        return self.fs.isdir(path)

    def _os_path_isfile(self, path):
        return self.fs.isfile(path)

    def _os_path_getsize(self, path):
        return self.fs.info(path)["size"]

    def _os_listdir(self, path):
        if not self.fs.isdir(path):
            if self.fs.isfile(path):
                raise NotADirectoryError(path)
            raise FileNotFoundError(path)
        return [posixpath.basename(name) for name in self.fs.ls(path, detail=False)]


@contextmanager
def mounted(target, mount_point, patch_open=True, patch_os=True):
    """
    Context manager that makes a directory tree visible under ``mount_point``.

    Parameters
    ----------
    target : Directory or fsspec.AbstractFileSystem
        A router (wrapped in an ApiFileSystem) or a ready filesystem
    mount_point : str
        Local path prefix under which the tree appears
    patch_open : bool, default True
        Whether to patch the built-in open function
    patch_os : bool, default True
        Whether to patch os and os.path functions

    Yields
    ------
    MountContext
        The active context

    Examples
    --------
    >>> router = NamespaceRouter.from_config(config)
    >>> with mounted(router, "/gc"):
    ...     print(os.listdir("/gc/customers"))
    ...     with open("/gc/customers/_create", "w") as f:
    ...         f.write('{"email": "a@example.com"}')
    """
    if isinstance(target, AbstractFileSystem):
        fs = target
    else:
        fs = ApiFileSystem(target)

    context = MountContext(fs, mount_point, patch_open=patch_open, patch_os=patch_os)

    try:
        context.__enter__()
        yield context
    finally:
        context.__exit__(None, None, None)
