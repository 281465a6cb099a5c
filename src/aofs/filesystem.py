from aofs.cache import ScratchSpace
from aofs.errors import ObjectNotFoundError
from aofs.errors import combine_errors
from aofs.file import S3File
from aofs.interfaces import IFileSystem
from zope.interface import implementer

import logging


logger = logging.getLogger(__name__)


@implementer(IFileSystem)
class S3FileSystem:
    """Opens S3File handles over the objects of one bucket.

    The object client is shared by every file this filesystem opens;
    each file gets its own scratch cache.
    """

    def __init__(self, client, scratch=None):
        self._client = client
        self._scratch = scratch if scratch is not None else ScratchSpace()

    def __repr__(self):
        return f"<S3FileSystem for {self._client!r}>"

    @property
    def bucket(self):
        return self._client.bucket_name

    def open(self, name):
        cache = self._scratch.create()
        try:
            n = self._client.download_fileobj(name, cache)
        except ObjectNotFoundError:
            logger.debug("No remote object for key=%s, starting empty", name)
            n = 0
        except Exception as e:
            raise self._discard(name, cache, e)

        try:
            cache.seek(n)
        except Exception as e:
            raise self._discard(name, cache, e)

        logger.debug("Opened key=%s with %d existing bytes", name, n)
        return S3File(self.bucket, name, cache, self._client, self._scratch)

    def _discard(self, name, cache, error):
        """Release a cache that will never reach an S3File.

        Return the error to raise: the original one, or a group holding
        it and any cleanup failures.
        """
        errors = [error]
        path = cache.name
        try:
            cache.close()
        except Exception as e:
            logger.warning("Failed to close cache %s", path, exc_info=True)
            errors.append(e)
        try:
            self._scratch.remove(path)
        except Exception as e:
            logger.warning("Failed to remove cache %s", path, exc_info=True)
            errors.append(e)
        return combine_errors(errors, f"opening s3://{self.bucket}/{name} failed")
