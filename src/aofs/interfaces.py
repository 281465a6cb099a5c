from zope.interface import Attribute
from zope.interface import Interface


class IObjectClient(Interface):
    """Whole-object access to a remote object store."""

    bucket_name = Attribute("Name of the bucket the client addresses.")

    def download_fileobj(key, fileobj):
        """Write the object's full content into fileobj.

        Return the number of bytes written. Raise ObjectNotFoundError
        if the object does not exist.
        """

    def upload_fileobj(fileobj, key):
        """Replace the object with fileobj's content, read from its
        current position to EOF."""

    def delete_object(key):
        """Delete an object. Missing keys are not an error."""


class IScratchSpace(Interface):
    """Allocator for local scratch files."""

    def create():
        """Return a new, empty, uniquely named binary file opened
        read-write. Its ``name`` is the path on disk."""

    def remove(path):
        """Remove a scratch file."""


class IFile(Interface):
    """Append-style file over a whole-object store."""

    def write(data):
        """Append data to the local cache and return the byte count."""

    def flush():
        """Upload the full cached content if anything was written."""

    def close():
        """Flush, then release the local cache."""


class IFileSystem(Interface):
    """Factory for IFile handles."""

    def open(name):
        """Return an IFile positioned at the end of the object's
        current content."""
