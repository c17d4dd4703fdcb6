import errno
import functools

import httpx
import requests
import structlog

from http_exception import (
    DirectoryNotEmptyException,
    HTTPStatusCodeException,
    InsufficientPermissionsException,
    NodeAttributesException,
    RangeNotSatisfiableException,
    WriteOffsetNotSupportedException,
)


class OxygenErrNo:
    """Maps client exceptions to OS level errno for file system front ends"""

    # HTTP status codes: https://datatracker.ietf.org/doc/html/rfc1945#autoid-43
    # errno: https://github.com/torvalds/linux/blob/master/lib/errname.c
    @staticmethod
    def http_to_errno(https_status_code: int) -> int:
        match https_status_code:
            case num if 100 <= num < 200:
                # Informational
                return 0
            case num if 200 <= num < 300:
                # Successful
                return 0
            case num if 300 <= num < 400:
                # Redirection
                return errno.EREMCHG
            case 401 | 403:
                return errno.EACCES
            case 404:
                return errno.ENOENT
            case 406:
                return errno.ENOTSUP
            case 409:
                return errno.EEXIST
            case 416:
                return errno.EINVAL
            case num if 400 <= num < 500:
                # Client Error
                return errno.EINVAL
            case num if 500 <= num < 600:
                # Server Error
                return errno.EAGAIN
            case _:
                # Unexpected HTTP status code
                return errno.EBADMSG

    @staticmethod
    def exception_to_errno(exception: BaseException) -> int:
        match exception:
            case DirectoryNotEmptyException():
                return errno.ENOTEMPTY
            case InsufficientPermissionsException():
                return errno.EACCES
            case RangeNotSatisfiableException():
                return errno.EINVAL
            case HTTPStatusCodeException():
                return OxygenErrNo.http_to_errno(exception.http_response_code)
            case WriteOffsetNotSupportedException():
                return errno.ENOTSUP
            case NodeAttributesException():
                return errno.EBADMSG
            case requests.exceptions.Timeout() | httpx.TimeoutException() | TimeoutError():
                return errno.ETIMEDOUT
            case requests.exceptions.RequestException() | httpx.TransportError():
                return errno.EIO
            case OSError() if exception.errno:
                return exception.errno
            case _:
                return errno.EBADMSG

    @staticmethod
    def return_negative_errno(func):
        """
        Known exception types are gracefully mapped to negative errno return values.
        Unknown exceptions are logged with exception info and also returned as a negative errno.
        """

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = structlog.getLogger(OxygenErrNo.__name__)
            try:
                return func(*args, **kwargs)
            except (HTTPStatusCodeException, WriteOffsetNotSupportedException, NodeAttributesException) as known_exception:
                logger.debug("Returning errno for exception", exception_type=type(known_exception).__name__, exception_message=known_exception.message)
                return -OxygenErrNo.exception_to_errno(known_exception)
            except Exception as unknown_exception:
                logger.exception("Unexpected exception")
                return -OxygenErrNo.exception_to_errno(unknown_exception)

        return wrapper
