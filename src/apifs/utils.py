"""
Utility functions for apifs.

This module provides helper functions for creating API clients
and path mappers.
"""

from typing import Callable, Tuple


def create_gocardless_client(settings):
    """
    Create a GoCardless Pro API client.

    Parameters
    ----------
    settings : GoCardlessSettings
        Access token and environment to connect with

    Returns
    -------
    gocardless_pro.Client
        The created client
    """
    import gocardless_pro

    return gocardless_pro.Client(
        access_token=settings.access_token,
        environment=settings.environment,
    )


def create_path_mapper(mount_point: str) -> Callable[[str, str], Tuple[bool, str]]:
    """
    Create a path mapper for a mount point.

    Parameters
    ----------
    mount_point : str
        Local path prefix; paths below it map to rooted filesystem paths

    Returns
    -------
    callable
        A function that takes (path, operation) and returns (should_patch, mapped_path)

    Examples
    --------
    >>> mapper = create_path_mapper("/gc")
    >>> mapper("/gc/customers/CU123", "open")
    (True, '/customers/CU123')
    >>> mapper("/etc/hosts", "open")
    (False, '/etc/hosts')
    """
    prefix = mount_point.rstrip("/")

    def mapper(path, operation):
        if not path:
            return False, path

        if path == prefix or path.startswith(prefix + "/"):
            rel_path = path[len(prefix) :].strip("/")
            return True, f"/{rel_path}"
        return False, path

    return mapper
