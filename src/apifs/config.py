"""
Configuration for apifs.

The set of exposed collections is fixed when the process starts: build an
``ApiFSConfig`` once and pass it to ``NamespaceRouter.from_config``.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .collection import CREATE_ENTRY, LIST_KEY

DEFAULT_COLLECTIONS = ("customers", "payments", "mandates", "payouts", "events")
DEFAULT_TTL = 60

RESERVED_NAMES = (CREATE_ENTRY, LIST_KEY)


@dataclass(frozen=True)
class ApiFSConfig:
    """
    Collections to expose and how long to cache them.

    Parameters
    ----------
    collections : dict
        Ordered mapping of directory name to remote collection handle
        (anything with list/get/create)
    ttl : float, default 60
        Seconds listings and objects stay cached
    """

    collections: Dict[str, Any] = field(default_factory=dict)
    ttl: float = DEFAULT_TTL

    @classmethod
    def from_client(cls, client, names: Iterable[str] = DEFAULT_COLLECTIONS, ttl=DEFAULT_TTL):
        """Look up each named collection as an attribute of ``client``."""
        return cls(
            collections={name: getattr(client, name) for name in names},
            ttl=ttl,
        )

    def validate(self) -> List[str]:
        """
        Check the configuration.

        Returns
        -------
        list of str
            Problems found; empty means OK
        """
        errors = []
        if not self.collections:
            errors.append("at least one collection must be configured")
        if self.ttl <= 0:
            errors.append(f"ttl must be positive, got {self.ttl}")
        for name in self.collections:
            if not name or "/" in name:
                errors.append(f"invalid collection name {name!r}")
            elif name in RESERVED_NAMES:
                errors.append(f"collection name {name!r} is reserved")
        return errors


@dataclass(frozen=True)
class GoCardlessSettings:
    """
    Credentials for the GoCardless Pro API.

    Parameters
    ----------
    access_token : str
        API access token
    environment : str, default "sandbox"
        ``sandbox`` or ``live``
    """

    access_token: str = ""
    environment: str = "sandbox"

    @classmethod
    def from_env(cls, environ=None):
        """Read ``GC_ACCESS_TOKEN`` and ``GC_ENVIRONMENT``."""
        if environ is None:
            environ = os.environ
        return cls(
            access_token=environ.get("GC_ACCESS_TOKEN", ""),
            environment=environ.get("GC_ENVIRONMENT", "sandbox"),
        )

    def validate(self) -> List[str]:
        errors = []
        if not self.access_token:
            errors.append("GC_ACCESS_TOKEN is not set")
        if self.environment not in ("sandbox", "live"):
            errors.append(f"GC_ENVIRONMENT must be sandbox or live, got {self.environment!r}")
        return errors
