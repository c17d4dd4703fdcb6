import requests
import structlog

from content_stream import ContentStream
from oxygen_requestor import USER_AGENT, OxygenRequest, OxygenRequestor, OxygenResponse

CHUNK_SIZE = 131072


class OxygenRequests(OxygenRequestor):
    """Sends requests with the 'requests' library"""

    def __init__(self, session: requests.Session | None = None):
        self._logger = structlog.getLogger(self.__class__.__name__)
        self._common_headers = {"User-Agent": USER_AGENT}
        self._session = session or requests.Session()

    def send(self, request: OxygenRequest, timeout: float | None = None) -> OxygenResponse:

        headers = self._common_headers | request.headers

        with structlog.contextvars.bound_contextvars(method=request.method, url=request.url, headers_supplied=sorted(headers.keys())):

            self._logger.debug("Sending request", range=headers.get("Range"))

            response = self._session.request(
                request.method,
                request.url,
                headers=headers,
                data=request.body,
                stream=True,
                timeout=timeout,
            )

            self._logger.debug("Response", headers_returned=sorted(response.headers.keys()), status_code=response.status_code)

            return OxygenResponse(
                response.status_code,
                response.headers,
                ContentStream(response.iter_content(CHUNK_SIZE), response.close),
            )

    def close(self) -> None:
        self._session.close()
