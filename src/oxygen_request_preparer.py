from typing import BinaryIO

from http_exception import WriteOffsetNotSupportedException
from observability.tracing import Tracing
from oxygen_requestor import OxygenRequest
from oxygen_url import OxygenURL

UNLIMITED_SIZE = -1
"""A read size meaning 'everything from the offset onwards'"""


class OxygenRequestPreparer:
    def __init__(self, token: str):
        # An empty token still gets sent, the server then only allows access to public content
        self._token = token

    def _prepare(self, method: str, url: OxygenURL, body: bytes | BinaryIO | None = None) -> OxygenRequest:
        headers = Tracing.get_trace_headers() | {"Authorization": self._token}
        return OxygenRequest(method, str(url), headers, body)

    def prepare_head(self, url: OxygenURL) -> OxygenRequest:
        return self._prepare("HEAD", url)

    def prepare_get(self, url: OxygenURL, offset: int = 0, size: int = UNLIMITED_SIZE) -> OxygenRequest:
        request = self._prepare("GET", url)
        range_header = OxygenRequestPreparer.range_header_value(offset, size)
        if range_header:
            request.headers["Range"] = range_header
        return request

    def prepare_post(self, url: OxygenURL, offset: int, body: bytes | BinaryIO | None) -> OxygenRequest:
        if offset != 0:
            raise WriteOffsetNotSupportedException(offset)
        return self._prepare("POST", url, body)

    def prepare_patch(self, url: OxygenURL, body: bytes) -> OxygenRequest:
        request = self._prepare("PATCH", url, body)
        request.headers["Content-Type"] = "application/json"
        return request

    def prepare_delete(self, url: OxygenURL) -> OxygenRequest:
        return self._prepare("DELETE", url)

    @staticmethod
    def range_header_value(offset: int, size: int) -> str | None:
        """None when the whole content is wanted"""
        if offset == 0 and size == UNLIMITED_SIZE:
            return None

        range_value = f"bytes={offset}-"
        if size != UNLIMITED_SIZE:
            range_value += str(offset + size - 1)
        return range_value
