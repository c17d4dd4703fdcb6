from oxygen_codes import ErrorCode, ErrorEnvelope


class OxygenException(Exception):
    """Base for everything the client raises itself. Transport failures are not wrapped."""

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def default_message(self) -> str:
        return "Oxygen client error"


class WriteOffsetNotSupportedException(OxygenException):
    """Raised before any request is sent"""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"Non-zero offset values are not currently supported for write operations, got {offset}")


class NodeAttributesException(OxygenException):
    """The server said the request succeeded but the node attribute headers can't be used"""

    @property
    def default_message(self) -> str:
        return "Unable to decode node attributes"


class UnableToResolveNodeIdException(NodeAttributesException):
    @property
    def default_message(self) -> str:
        return "Unable to resolve path with id"


class InvalidNodeIdException(NodeAttributesException):
    def __init__(self, node_id_text: str):
        self.node_id_text = node_id_text
        super().__init__(f"Unable to convert node id string {node_id_text!r} to integer")


class HTTPStatusCodeException(OxygenException):
    def __init__(self, https_http_status_code: int, message: str | None = None, error_envelope: ErrorEnvelope | None = None):
        if not isinstance(https_http_status_code, int):
            raise TypeError("Expected integer HTTP status code")
        self._https_http_status_code = https_http_status_code
        self.error_envelope = error_envelope or ErrorEnvelope()
        if message is None:
            message = f"{self.default_message}: HTTP status code {https_http_status_code}"
        super().__init__(message)

    @property
    def http_response_code(self) -> int:
        return self._https_http_status_code

    @property
    def default_message(self) -> str:
        return "HTTP exception"


class HTTPStatusCodeWithRangeException(HTTPStatusCodeException):
    def __init__(self, https_http_status_code: int, message: str | None = None, error_envelope: ErrorEnvelope | None = None):
        if not isinstance(https_http_status_code, int):
            raise TypeError("Expected integer HTTP status code")
        self.check_in_range(https_http_status_code)
        super().__init__(https_http_status_code, message, error_envelope)

    def check_in_range(self, https_http_status_code: int):

        if https_http_status_code < self.range[0]:
            raise ValueError(f"HTTP status code of {https_http_status_code} is lower than the minimum allowed of {self.range[0]}")

        if https_http_status_code > self.range[1]:
            raise ValueError(f"HTTP status code of {https_http_status_code} is higher than the maximum allowed of {self.range[1]}")

    @property
    def range(self) -> tuple[int, int]:
        return 100, 599


class HTTPStatusCodeWithFixedValueException(HTTPStatusCodeWithRangeException):
    def __init__(self, message: str | None = None, error_envelope: ErrorEnvelope | None = None):
        super().__init__(self.expected_https_http_status_code, message, error_envelope)

    @property
    def expected_https_http_status_code(self) -> int:
        return 0

    @property
    def range(self) -> tuple[int, int]:
        return self.expected_https_http_status_code, self.expected_https_http_status_code


class RequestDidNotSucceedException(HTTPStatusCodeWithRangeException):
    """Any unsuccessful status without a more specific meaning. The status code is kept so callers can refine it."""

    @property
    def range(self) -> tuple[int, int]:
        return 100, 999

    @property
    def default_message(self) -> str:
        return "HTTP request returned non 2XX status code"


class ForbiddenException(HTTPStatusCodeWithFixedValueException):
    """403"""

    @property
    def expected_https_http_status_code(self) -> int:
        return 403

    @property
    def default_message(self) -> str:
        return "Forbidden"


class InsufficientPermissionsException(ForbiddenException):
    @property
    def default_message(self) -> str:
        return "Not enough permissions to perform task"


class DirectoryNotEmptyException(ForbiddenException):
    @property
    def default_message(self) -> str:
        return "Directory not empty"


class RangeNotSatisfiableException(HTTPStatusCodeWithFixedValueException):
    """416"""

    @property
    def expected_https_http_status_code(self) -> int:
        return 416

    @property
    def default_message(self) -> str:
        return "Range not satisfiable"


class HTTPStatusCodeToException:
    @staticmethod
    def is_successful(http_status_code: int) -> bool:
        return 200 <= http_status_code <= 299

    @staticmethod
    def raise_exception_for_failed_requests(http_status_code: int, response_content: bytes | None = None) -> None:
        """Only 403 and 416 have their own meaning, every other unsuccessful status is collapsed into one exception"""

        if HTTPStatusCodeToException.is_successful(http_status_code):
            return

        if http_status_code == 403:
            error_envelope = ErrorEnvelope.from_content(response_content)
            if error_envelope.code == ErrorCode.ERROR_DIRECTORY_NOT_EMPTY:
                raise DirectoryNotEmptyException(error_envelope.description or None, error_envelope)
            raise InsufficientPermissionsException(error_envelope.description or None, error_envelope)

        if http_status_code == 416:
            raise RangeNotSatisfiableException()

        raise RequestDidNotSucceedException(http_status_code)
