"""
Directory view of a single remote collection.

Each object of the collection becomes a read-only JSON file named after its
id, and the reserved ``_create`` file turns a written JSON document into a
remote ``create`` call.
"""

import json
import logging
import time
from collections.abc import Mapping

from .cache import ExpiringCache
from .errors import ParseError
from .router import Directory

logger = logging.getLogger(__name__)

CREATE_ENTRY = "_create"
CREATE_PATH = "/" + CREATE_ENTRY
LIST_KEY = "_list"


def _records(listing):
    # Paginated clients wrap the page in a response object
    return list(getattr(listing, "records", listing))


def _attributes(resource):
    if isinstance(resource, Mapping):
        return dict(resource)
    attributes = getattr(resource, "attributes", None)
    if attributes is not None:
        return dict(attributes)
    return dict(vars(resource))


def _resource_id(resource):
    if isinstance(resource, Mapping):
        return resource["id"]
    return resource.id


class CollectionDirectory(Directory):
    """
    Expose one remote collection as a flat directory.

    The remote ``service`` must provide ``list()``, ``get(id)`` and
    ``create(params=...)``. Listings and object bodies are cached for
    ``ttl`` seconds; a successful create invalidates the listing.
    """

    def __init__(self, service, ttl=60, timer=time.monotonic):
        self.service = service
        self._cache = ExpiringCache(ttl=ttl, timer=timer)

    def _list(self):
        return self._cache.get(LIST_KEY, lambda: _records(self.service.list()))

    def _ids(self):
        return [str(_resource_id(resource)) for resource in self._list()]

    def entries(self, path):
        return self._ids() + [CREATE_ENTRY]

    def is_file(self, path):
        if path == CREATE_PATH:
            return True
        return path in ["/" + resource_id for resource_id in self._ids()]

    def is_directory(self, path):
        return False

    def can_write(self, path):
        return path == CREATE_PATH

    def read(self, path):
        if path == CREATE_PATH:
            return b""
        return self._cache.get(path, lambda: self._fetch(path.lstrip("/")))

    def _fetch(self, resource_id):
        resource = self.service.get(resource_id)
        return json.dumps(_attributes(resource)).encode("utf-8")

    def write(self, path, content):
        """
        Create a remote object from a JSON document.

        Parameters
        ----------
        path : str
            Path within the collection, normally ``/_create``
        content : bytes or str
            JSON object whose fields become the creation parameters

        Returns
        -------
        str or None
            Id of the created object, or None when ``content`` was empty

        Raises
        ------
        ParseError
            If ``content`` is not a JSON object; nothing is sent remotely
        """
        if not content:
            return None

        try:
            params = json.loads(content)
        except ValueError as e:
            raise ParseError(path, f"invalid JSON ({e})") from e
        if not isinstance(params, dict):
            raise ParseError(path, "expected a JSON object")

        created = self.service.create(params=params)
        # Two separate invalidations; a reader in between may see a stale list
        self._cache.invalidate(path)
        self._cache.invalidate(LIST_KEY)

        try:
            created_id = _resource_id(created)
        except (AttributeError, KeyError, TypeError):
            created_id = None
        logger.info("created object %s via %s", created_id, path)
        return created_id
