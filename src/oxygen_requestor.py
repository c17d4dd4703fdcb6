from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import BinaryIO

import httpx
import requests

from content_stream import ContentStream

USER_AGENT = "OxygenClient/v0.1.0"

BODY_READ_EXCEPTIONS = (requests.exceptions.RequestException, httpx.TransportError, OSError)
"""What either HTTP library raises when a body breaks off part way"""


@dataclass
class OxygenRequest:
    """One exchange with the service, independent of the HTTP library that sends it"""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | BinaryIO | None = None


@dataclass
class OxygenResponse:
    status_code: int
    headers: Mapping[str, str]
    """Case-insensitive, as supplied by the HTTP library"""
    body: ContentStream

    def read_and_close(self) -> bytes:
        with self.body:
            return self.body.read()

    def read_and_close_if_possible(self) -> bytes | None:
        """None if the body breaks off before the end, the response is closed either way"""
        try:
            return self.body.read()
        except BODY_READ_EXCEPTIONS:
            return None
        finally:
            self.body.close()

    def close(self) -> None:
        self.body.close()


class OxygenRequestor:
    def send(self, request: OxygenRequest, timeout: float | None = None) -> OxygenResponse:
        """
        Send the request and return the response with its body still open, whatever the status code.
        Transport failures are raised by the HTTP library and are left alone.
        """
        pass

    def close(self) -> None:
        pass
