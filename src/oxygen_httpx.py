from collections.abc import Iterator
from typing import BinaryIO

import httpx
import structlog

from content_stream import ContentStream
from oxygen_requestor import USER_AGENT, OxygenRequest, OxygenRequestor, OxygenResponse

CHUNK_SIZE = 131072


class OxygenHTTPX(OxygenRequestor):
    """Sends requests with 'httpx', which also gives us HTTP/2 when the server offers it"""

    def __init__(self, client: httpx.Client | None = None):
        self._logger = structlog.getLogger(self.__class__.__name__)
        self._common_headers = {"User-Agent": USER_AGENT}
        limits = httpx.Limits(max_keepalive_connections=None, max_connections=None)
        self._client = client or httpx.Client(limits=limits, http2=True, timeout=None, follow_redirects=True)

    @staticmethod
    def _iterate_file(body: BinaryIO) -> Iterator[bytes]:
        while chunk := body.read(CHUNK_SIZE):
            yield chunk

    def send(self, request: OxygenRequest, timeout: float | None = None) -> OxygenResponse:

        headers = self._common_headers | request.headers

        with structlog.contextvars.bound_contextvars(method=request.method, url=request.url, headers_supplied=sorted(headers.keys())):

            self._logger.debug("Sending request", range=headers.get("Range"))

            content = request.body
            if content is not None and not isinstance(content, bytes):
                content = OxygenHTTPX._iterate_file(content)

            http_request = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=content,
                timeout=timeout,
            )
            response = self._client.send(http_request, stream=True)

            self._logger.debug("Response", headers_returned=sorted(response.headers.keys()), status_code=response.status_code, http_version=response.http_version)

            return OxygenResponse(
                response.status_code,
                response.headers,
                ContentStream(response.iter_bytes(CHUNK_SIZE), response.close),
            )

    def close(self) -> None:
        self._client.close()
