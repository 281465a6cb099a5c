from aofs.errors import ObjectNotFoundError
from aofs.errors import S3OperationError
from aofs.interfaces import IObjectClient
from botocore.config import Config
from botocore.exceptions import ClientError
from zope.interface import implementer

import boto3
import contextlib
import logging
import re


logger = logging.getLogger(__name__)

# HeadObject answers a bare 404 for missing buckets too, so only GetObject's
# NoSuchKey means the object is absent.
_NOT_FOUND_CODE = "NoSuchKey"
_CHUNK_SIZE = 1024 * 1024


class _KeepOpen:
    """Proxy that ignores close().

    The transfer manager closes the file objects it uploads from; the
    cache must outlive every flush.
    """

    def __init__(self, fileobj):
        self._fileobj = fileobj

    def __getattr__(self, name):
        return getattr(self._fileobj, name)

    def close(self):
        pass


@implementer(IObjectClient)
class S3Client:
    """Thin boto3 wrapper giving whole-object access to one bucket."""

    def __init__(
        self,
        bucket_name,
        prefix="",
        endpoint_url=None,
        region_name=None,
        aws_access_key_id=None,
        aws_secret_access_key=None,
        use_ssl=True,
        addressing_style="auto",
        connect_timeout=60,
        read_timeout=60,
    ):
        self.bucket_name = bucket_name
        self._prefix = prefix.rstrip("/") if prefix else ""

        if self._prefix:
            if not re.fullmatch(r"[a-zA-Z0-9._/-]*", self._prefix):
                raise ValueError(
                    f"s3-prefix contains invalid characters: {self._prefix!r}. "
                    "Only alphanumeric characters, dots, hyphens, underscores, "
                    "and slashes are allowed."
                )
            if ".." in self._prefix:
                raise ValueError(f"s3-prefix must not contain '..': {self._prefix!r}")

        config = Config(
            s3={"addressing_style": addressing_style},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        kwargs = {"config": config}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        if region_name:
            kwargs["region_name"] = region_name
        if aws_access_key_id:
            kwargs["aws_access_key_id"] = aws_access_key_id
        if aws_secret_access_key:
            kwargs["aws_secret_access_key"] = aws_secret_access_key
        kwargs["use_ssl"] = use_ssl
        if not use_ssl:
            logger.warning(
                "S3 SSL is disabled, data and credentials are transmitted in cleartext"
            )

        self._client = boto3.client("s3", **kwargs)

    def __repr__(self):
        return f"<S3Client bucket={self.bucket_name!r} prefix={self._prefix!r}>"

    def _full_key(self, key):
        if self._prefix:
            return f"{self._prefix}/{key}"
        return key

    def _wrap_client_error(self, e, operation, key):
        """Wrap ClientError in a generic error, logging the original at DEBUG."""
        logger.debug("S3 %s failed for key=%s: %s", operation, key, e)
        code = e.response["Error"].get("Code", "Unknown")
        error_class = S3OperationError
        if operation == "download" and code == _NOT_FOUND_CODE:
            error_class = ObjectNotFoundError
        raise error_class(f"S3 {operation} failed for key={key}: {code}") from e

    def download_fileobj(self, key, fileobj):
        try:
            response = self._client.get_object(
                Bucket=self.bucket_name, Key=self._full_key(key)
            )
        except ClientError as e:
            self._wrap_client_error(e, "download", key)
        written = 0
        with contextlib.closing(response["Body"]) as body:
            for chunk in body.iter_chunks(_CHUNK_SIZE):
                written += fileobj.write(chunk)
        return written

    def upload_fileobj(self, fileobj, key):
        try:
            self._client.upload_fileobj(
                _KeepOpen(fileobj), self.bucket_name, self._full_key(key)
            )
        except ClientError as e:
            self._wrap_client_error(e, "upload", key)

    def delete_object(self, key):
        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=self._full_key(key))
        except ClientError as e:
            self._wrap_client_error(e, "delete", key)
