from aofs.interfaces import IScratchSpace
from zope.interface import implementer

import contextlib
import logging
import os
import tempfile


logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "s3-"


@implementer(IScratchSpace)
class ScratchSpace:
    """Local scratch files backing open S3File caches.

    Each file is created as {cache_dir}/s3-XXXXXXXX and is
    owned by exactly one open file until removed.
    """

    def __init__(self, cache_dir=None):
        self.cache_dir = cache_dir
        if cache_dir is not None:
            os.makedirs(cache_dir, exist_ok=True, mode=0o700)

    def __repr__(self):
        return f"<ScratchSpace in {self.cache_dir or tempfile.gettempdir()!r}>"

    def create(self):
        cache = tempfile.NamedTemporaryFile(
            mode="w+b", prefix=SCRATCH_PREFIX, dir=self.cache_dir, delete=False
        )
        logger.debug("Created scratch file %s", cache.name)
        return cache

    def remove(self, path):
        os.remove(path)
        logger.debug("Removed scratch file %s", path)

    def list_files(self):
        """Return paths of live scratch files. For testing."""
        directory = self.cache_dir or tempfile.gettempdir()
        return sorted(
            os.path.join(directory, fn)
            for fn in os.listdir(directory)
            if fn.startswith(SCRATCH_PREFIX)
        )

    def current_size(self):
        """Return total size of live scratch files. For testing."""
        total = 0
        for path in self.list_files():
            with contextlib.suppress(OSError):
                total += os.path.getsize(path)
        return total
