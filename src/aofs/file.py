from aofs.errors import raise_collected
from aofs.interfaces import IFile
from zope.interface import implementer

import logging
import os


logger = logging.getLogger(__name__)


@implementer(IFile)
class S3File:
    """Append-style file whose content is persisted as one S3 object.

    Writes go to a local cache file. Every flush uploads the entire
    cache, replacing the remote object, and leaves the cursor at EOF so
    later writes keep appending.

    Not thread-safe: callers must serialize write/flush/close on one
    instance. Different instances share only the object client.
    """

    def __init__(self, bucket, key, cache, client, scratch):
        self._bucket = bucket
        self._key = key
        self._cache = cache
        self._client = client
        self._scratch = scratch
        self._dirty = 0
        self._closed = False

    def __repr__(self):
        state = "closed" if self._closed else f"dirty={self._dirty}"
        return f"<S3File s3://{self._bucket}/{self._key} {state}>"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def name(self):
        return self._key

    @property
    def bucket(self):
        return self._bucket

    @property
    def dirty(self):
        """Bytes written since the last successful flush."""
        return self._dirty

    @property
    def closed(self):
        return self._closed

    def writable(self):
        return True

    def _check_closed(self):
        if self._closed:
            raise ValueError("I/O operation on closed file.")

    def write(self, data):
        self._check_closed()
        n = self._cache.write(data)
        self._dirty += n
        return n

    def flush(self):
        self._check_closed()
        if self._dirty == 0:
            return

        self._cache.seek(0)
        try:
            self._client.upload_fileobj(self._cache, self._key)
        finally:
            # Keep appending after a failed upload, too.
            self._cache.seek(0, os.SEEK_END)
        logger.debug(
            "Uploaded %d dirty bytes to key=%s", self._dirty, self._key
        )
        self._dirty = 0

    def close(self):
        if self._closed:
            return

        errors = []
        try:
            self.flush()
        except Exception as e:
            errors.append(e)
        self._closed = True

        path = self._cache.name
        try:
            self._cache.close()
        except Exception as e:
            logger.warning("Failed to close cache %s", path, exc_info=True)
            errors.append(e)
        try:
            self._scratch.remove(path)
        except Exception as e:
            logger.warning("Failed to remove cache %s", path, exc_info=True)
            errors.append(e)

        logger.debug("Closed key=%s with %d error(s)", self._key, len(errors))
        raise_collected(errors, f"closing s3://{self._bucket}/{self._key} failed")
