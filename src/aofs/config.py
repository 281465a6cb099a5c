import io
import os
import ZConfig


_schema = None


def getFilesystemSchema():
    global _schema
    if _schema is None:
        _schema = ZConfig.loadSchema(
            os.path.join(os.path.dirname(__file__), "schema.xml")
        )
    return _schema


def filesystemFromString(s):
    return filesystemFromFile(io.StringIO(s))


def filesystemFromFile(f):
    config, handle = ZConfig.loadConfigFile(getFilesystemSchema(), f)
    return config.filesystem.open()


class S3FileSystemFactory:
    """ZConfig factory for S3FileSystem."""

    def __init__(self, config):
        self.config = config
        self.name = config.getSectionName()

    def open(self):
        from aofs.cache import ScratchSpace
        from aofs.filesystem import S3FileSystem
        from aofs.s3client import S3Client

        config = self.config
        s3_client = S3Client(
            bucket_name=config.bucket_name,
            prefix=config.s3_prefix,
            endpoint_url=config.s3_endpoint_url,
            region_name=config.s3_region,
            aws_access_key_id=config.s3_access_key,
            aws_secret_access_key=config.s3_secret_key,
            use_ssl=config.s3_use_ssl,
            addressing_style=config.s3_addressing_style,
            connect_timeout=config.s3_connect_timeout,
            read_timeout=config.s3_read_timeout,
        )
        scratch = ScratchSpace(cache_dir=config.cache_dir)
        return S3FileSystem(s3_client, scratch)
