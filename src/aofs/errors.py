class S3OperationError(Exception):
    """Wraps boto3 ClientError to avoid leaking AWS infrastructure details."""


class ObjectNotFoundError(S3OperationError):
    """The requested object does not exist."""


def combine_errors(errors, message):
    """Return the single error, or an ExceptionGroup holding all of them."""
    if len(errors) == 1:
        return errors[0]
    return ExceptionGroup(message, errors)


def raise_collected(errors, message):
    """Raise the collected errors, if any.

    A single error is raised as-is; several are raised together as an
    ExceptionGroup so that none of them is lost.
    """
    if errors:
        raise combine_errors(errors, message)
