from aofs.errors import ObjectNotFoundError  # noqa: F401
from aofs.errors import S3OperationError  # noqa: F401
from aofs.file import S3File  # noqa: F401
from aofs.filesystem import S3FileSystem  # noqa: F401
