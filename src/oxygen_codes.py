import json
from dataclasses import dataclass
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes returned by the Oxygen service in JSON error bodies. This is a wire contract so never renumber an entry."""

    SUCCESS = 1000000
    ERROR_PARSING_JSON = 2
    ERROR_INVALID_METHOD = 3
    ERROR_INVALID_VERSION = 4
    ERROR_MISSING_ARGUMENTS = 5
    ERROR_INVALID_PROJECTNAME = 6
    ERROR_PROJECT_ALREADY_EXISTS = 7
    ERROR_INVALID_TOKEN = 8
    ERROR_INVALID_RANGE = 9
    ERROR_INVALID_CONTENT_LENGTH = 10
    ERROR_INVALID_ID_PARAMETER = 11
    ERROR_REQUIRE_TOKEN = 12
    ERROR_MAX_PROJECTS_REACHED = 13
    ERROR_INVALID_CREDENTIALS = 14
    ERROR_NEED_EMAIL_PASSWORD_OR_TOKEN = 15
    ERROR_INVALID_EMAIL = 16
    ERROR_INVALID_PASSWORD = 17
    ERROR_INVALID_EXPIRES = 18
    ERROR_INVALID_ARGUMENT_TYPE = 19
    ERROR_TOKEN_EMPTY = 20
    ERROR_PROJECT_DOES_NOT_EXIST = 21
    ERROR_INTERNAL_ERROR = 22
    ERROR_PATH_NOT_FOUND = 23
    ERROR_PATH_NOT_FOUND_SOURCE = 24
    ERROR_PATH_NOT_FOUND_DESTINATION = 25
    ERROR_INVALID_PATH = 26
    ERROR_INVALID_SOURCE_PATH = 27
    ERROR_INVALID_DESTINATION_PATH = 28
    ERROR_DIRECTORY_ALREADY_EXISTS = 29
    ERROR_INVALID_USERNAME = 30
    ERROR_USERNAME_ALREADY_EXISTS = 31
    ERROR_EMAIL_ALREADY_IN_USE = 32
    ERROR_NO_WRITE_PERMISSION = 33
    ERROR_NOT_A_DIRECTORY = 34
    ERROR_DIRECTORY_NOT_EMPTY = 35
    ERROR_PATH_ALREADY_EXISTS = 36
    ERROR_USER_CANNOT_TAKE_PROJECT = 37
    ERROR_PROJECT_ALREADY_SHARED_WITH_USER = 38
    ERROR_INVALID_PERMISSIONS = 39
    ERROR_INSUFFICIENT_PERMISSIONS = 40
    ERROR_INSUFFICIENT_PERMISSIONS_SOURCE = 41
    ERROR_INSUFFICIENT_PERMISSIONS_DESTINATION = 42
    ERROR_405 = 43
    ERROR_OUT_OF_RANGE = 44
    NO_RESPONSE_REQUIRED = 45


@dataclass(frozen=True)
class ErrorEnvelope:
    code: int | None = None
    description: str = ""

    @staticmethod
    def from_content(content: bytes | None) -> "ErrorEnvelope":
        """Best effort, anything we can't understand is treated as having no code"""
        if not content:
            return ErrorEnvelope()

        try:
            parsed = json.loads(content)
        except (ValueError, UnicodeDecodeError):
            return ErrorEnvelope()

        if not isinstance(parsed, dict):
            return ErrorEnvelope()

        code = parsed.get("code")
        if not isinstance(code, int) or isinstance(code, bool):
            code = None

        description = parsed.get("description")
        if not isinstance(description, str):
            description = ""

        return ErrorEnvelope(code, description)

    @property
    def known_code(self) -> ErrorCode | None:
        try:
            return ErrorCode(self.code)
        except ValueError:
            return None
