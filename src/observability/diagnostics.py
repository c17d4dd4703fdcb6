import dataclasses
from collections.abc import Iterator

import structlog

from content_stream import ContentStream
from oxygen_requestor import BODY_READ_EXCEPTIONS, OxygenRequest, OxygenResponse

CHUNK_SIZE = 64 * 1024


class DiagnosticCapture:
    """
    Logs the bodies of requests and responses.
    Bodies are read completely and replayed from memory so the exchange behaves the same as it would without capture.
    Streamed reads lose their streaming while this is enabled.
    """

    def __init__(self) -> None:
        self._logger = structlog.getLogger(self.__class__.__name__)

    def capture_request(self, request: OxygenRequest) -> OxygenRequest:
        body = request.body
        if body is not None and not isinstance(body, bytes):
            body = body.read()

        self._logger.debug("Outgoing request", method=request.method, url=request.url, headers=sorted(request.headers.keys()), body=body)
        return dataclasses.replace(request, body=body)

    def capture_response(self, response: OxygenResponse) -> OxygenResponse:
        """A body that breaks off is replayed up to the break, then raises the same error"""
        received = []
        read_error = None
        try:
            while chunk := response.body.read(CHUNK_SIZE):
                received.append(chunk)
        except BODY_READ_EXCEPTIONS as error:
            read_error = error
        finally:
            response.close()

        content = b"".join(received)
        self._logger.debug(
            "Incoming response",
            status_code=response.status_code,
            headers=dict(response.headers),
            body=content,
            body_complete=read_error is None,
        )
        return dataclasses.replace(response, body=ContentStream(DiagnosticCapture._replay(content, read_error)))

    @staticmethod
    def _replay(content: bytes, read_error: Exception | None) -> Iterator[bytes]:
        yield content
        if read_error is not None:
            raise read_error
