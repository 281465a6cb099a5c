"""In-memory object client.

Implements IObjectClient with a dictionary of key -> bytes. Useful for
tests and for callers that want aofs semantics without a remote store.
"""

from aofs.errors import ObjectNotFoundError
from aofs.interfaces import IObjectClient
from zope.interface import implementer

import logging
import threading


logger = logging.getLogger(__name__)


@implementer(IObjectClient)
class MemoryObjectClient:
    """Object client that keeps whole objects in memory.

    Uploads replace the stored bytes entirely, matching S3's
    whole-object semantics.
    """

    def __init__(self, bucket_name="memory"):
        self.bucket_name = bucket_name
        self._objects = {}
        self._lock = threading.Lock()

    def __repr__(self):
        return f"<MemoryObjectClient bucket={self.bucket_name!r}>"

    def download_fileobj(self, key, fileobj):
        with self._lock:
            data = self._objects.get(key)
        if data is None:
            raise ObjectNotFoundError(f"S3 download failed for key={key}: NoSuchKey")
        return fileobj.write(data)

    def upload_fileobj(self, fileobj, key):
        data = fileobj.read()
        with self._lock:
            self._objects[key] = data
        logger.debug("Stored %d bytes at key=%s", len(data), key)

    def delete_object(self, key):
        with self._lock:
            self._objects.pop(key, None)

    def get(self, key):
        """Return the stored bytes for key, or None."""
        with self._lock:
            return self._objects.get(key)

    def keys(self):
        with self._lock:
            return sorted(self._objects)
