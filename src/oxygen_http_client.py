import io
import json
from typing import BinaryIO

import structlog

from cache import (
    Cache,
    CacheFactory,
    EntityDoesNotExistException,
    NullCache,
    content_window,
)
from content_stream import ContentStream
from decorators import Decorators
from http_exception import (
    HTTPStatusCodeToException,
    NodeAttributesException,
    RangeNotSatisfiableException,
)
from node_attributes import NodeAttributes
from observability.diagnostics import DiagnosticCapture
from observability.tracing import Tracing
from oxygen_client import ROOT_NODE_ID, OxygenClient
from oxygen_configuration import OxygenConfiguration, OxygenConfigurationException
from oxygen_request_preparer import UNLIMITED_SIZE, OxygenRequestPreparer
from oxygen_requestor import OxygenRequest, OxygenRequestor, OxygenResponse
from oxygen_url import OxygenURL


class HttpClient(OxygenClient):
    """
    Talks to the Oxygen service over HTTP, one request per operation.
    Every call blocks until its exchange is done and nothing is retried.
    The only state shared between calls is the configuration, the HTTP session and the cache.
    """

    def __init__(
        self,
        endpoint: str,
        token: str = "",
        requestor: OxygenRequestor | None = None,
        log: bool = False,
        timeout: float | None = None,
        cache: Cache | None = None,
    ):
        self._logger = structlog.getLogger(self.__class__.__name__).bind(endpoint=endpoint)
        self._endpoint = endpoint
        self._preparer = OxygenRequestPreparer(token)
        self._timeout = timeout
        """Seconds to wait on the transport, None waits forever"""
        self._cache: Cache = cache if cache is not None else NullCache()
        self._diagnostics: DiagnosticCapture | None = DiagnosticCapture() if log else None

        # Specify a default so people don't have to worry about it until they want to
        self._requestor = requestor or HttpClient.set_up_requestor("requests")

    @staticmethod
    def from_configuration(configuration: OxygenConfiguration) -> "HttpClient":
        return HttpClient(
            configuration.endpoint,
            configuration.token,
            HttpClient.set_up_requestor(configuration.http_library),
            log=configuration.log_requests,
            timeout=configuration.timeout_seconds,
            cache=CacheFactory.get_cache(configuration.content_caching),
        )

    @staticmethod
    def set_up_requestor(http_library: str) -> OxygenRequestor:
        match http_library:
            case "httpx":
                from oxygen_httpx import OxygenHTTPX

                return OxygenHTTPX()
            case "requests":
                from oxygen_requests import OxygenRequests

                return OxygenRequests()
            case _:
                raise OxygenConfigurationException(f"Unknown HTTP library {http_library!r}, use 'requests' or 'httpx'")

    def start_logging(self) -> "HttpClient":
        """Log the bodies of every request and response from now on"""
        self._diagnostics = DiagnosticCapture()
        return self

    def set_cache(self, cache: Cache) -> None:
        self._cache = cache

    def new_url(self, template: str, *args) -> OxygenURL:
        return OxygenURL.build(self._endpoint, template, *args)

    def close(self) -> None:
        self._requestor.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def resolve_path_from_node(self, start_node: int, path: str) -> NodeAttributes:
        if path == "":
            url = self.new_url("%d", start_node).set_id_query()
        else:
            url = self.new_url("%d/%s", start_node, path).set_id_query()

        attributes, response = self._do_request(self._preparer.prepare_head(url))
        response.close()
        return attributes

    def resolve_path(self, path: str) -> NodeAttributes:
        return self.resolve_path_from_node(ROOT_NODE_ID, path)

    def resolve_node(self, node_id: int) -> NodeAttributes:
        return self.resolve_path_from_node(node_id, "")

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def read_node(self, node_id: int, offset: int = 0, size: int = UNLIMITED_SIZE) -> tuple[NodeAttributes, ContentStream]:
        url = self.new_url("%d", node_id).set_id_query()
        return self._read(url, offset, size)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def read_path(self, path: str, offset: int = 0, size: int = UNLIMITED_SIZE) -> tuple[NodeAttributes, ContentStream]:
        url = self.new_url("%s", path)
        return self._read(url, offset, size)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def read_node_cached(self, node_id: int, offset: int = 0, size: int = UNLIMITED_SIZE) -> BinaryIO:
        """
        Serve the window from the cache, filling the cache with the whole content of the node first if needed.
        Like 'read_node', a window starting at or past the end of the content raises RangeNotSatisfiableException.
        """
        try:
            with self._cache.get(node_id, offset, size) as cached:
                return self._checked_window(node_id, cached.read(), offset, size)
        except EntityDoesNotExistException:
            self._logger.debug("Not cached", node_id=node_id)

        _, content = self.read_node(node_id)
        with content:
            whole_content = content.read()
        self._cache.put(node_id, io.BytesIO(whole_content))
        return self._checked_window(node_id, content_window(whole_content, offset, size), offset, size)

    def _checked_window(self, node_id: int, window: bytes, offset: int, size: int) -> BinaryIO:
        # An empty window for a non-empty range means the range starts past the end
        asks_for_range = OxygenRequestPreparer.range_header_value(offset, size) is not None
        if asks_for_range and size != 0 and not window:
            self._logger.debug("Cached content is shorter than the offset", node_id=node_id, offset=offset)
            raise RangeNotSatisfiableException()
        return io.BytesIO(window)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def overwrite_node(self, node_id: int, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        url = self.new_url("%d", node_id).set_id_query().set_overwrite_query()
        try:
            return self._write(url, offset, data)
        finally:
            # Evicted whatever the outcome, an undecodable response can follow an accepted write
            self._cache.evict(node_id)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def overwrite_path(self, path: str, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        url = self.new_url("%s", path).set_overwrite_query()
        return self._write(url, offset, data)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def overwrite_path_from_node(self, node_id: int, path: str, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        url = self.new_url("%d/%s", node_id, path).set_id_query().set_overwrite_query()
        return self._write(url, offset, data)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def create_path_from_node(self, node_id: int, path: str, data: bytes | BinaryIO | None) -> NodeAttributes:
        url = self.new_url("%d/%s", node_id, path).set_id_query()
        return self._write(url, 0, data)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def create_path(self, path: str, data: bytes | BinaryIO | None) -> NodeAttributes:
        url = self.new_url("%s", path)
        return self._write(url, 0, data)

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def delete_from_node(self, node_id: int, entry: str) -> None:
        url = self.new_url("%d/%s", node_id, entry).set_id_query()
        _, response = self._do_request(self._preparer.prepare_delete(url))
        response.close()

    @Tracing.traced
    @Decorators.log_invocation_with_scalar_args
    def rename_from_node_to_node(self, old_node_id: int, old_name: str, new_node_id: int, new_name: str) -> None:
        url = self.new_url("%d/%s", old_node_id, old_name).set_id_query().set_overwrite_query()
        parameters = {
            "path": f"/{new_node_id}/{new_name}",
            "path_using_id": True,
        }
        body = json.dumps(parameters, separators=(",", ":")).encode()
        _, response = self._do_request(self._preparer.prepare_patch(url, body))
        response.close()

    def _read(self, url: OxygenURL, offset: int, size: int) -> tuple[NodeAttributes, ContentStream]:
        attributes, response = self._do_request(self._preparer.prepare_get(url, offset, size))
        return attributes, response.body

    def _write(self, url: OxygenURL, offset: int, data: bytes | BinaryIO | None) -> NodeAttributes:
        # Raises before anything is sent if the offset isn't supported
        request = self._preparer.prepare_post(url, offset, data)

        attributes, response = self._do_request(request)
        response.close()

        # Anything cached for this node is now stale
        self._cache.evict(attributes.node_id)
        return attributes

    def _do_request(self, request: OxygenRequest) -> tuple[NodeAttributes, OxygenResponse]:
        """On success the response body is left open for the caller to close"""

        with structlog.contextvars.bound_contextvars(method=request.method, url=request.url):

            if self._diagnostics:
                request = self._diagnostics.capture_request(request)

            try:
                response = self._requestor.send(request, self._timeout)
            except Exception:
                self._logger.info("Request failed in transport", exc_info=True)
                raise

            if self._diagnostics:
                response = self._diagnostics.capture_response(response)

            if not HTTPStatusCodeToException.is_successful(response.status_code):
                # The status alone is enough to classify when the body can't be read
                content = response.read_and_close_if_possible()
                self._logger.debug("Request did not succeed", status_code=response.status_code, body_read=content is not None)
                HTTPStatusCodeToException.raise_exception_for_failed_requests(response.status_code, content)

            try:
                attributes = NodeAttributes.from_headers(response.headers)
            except NodeAttributesException as attributes_exception:
                response.close()
                self._logger.warning("Unable to decode node attributes", exception_message=attributes_exception.message, status_code=response.status_code)
                raise

            self._logger.debug("Node attributes", node_id=attributes.node_id, node_type=attributes.node_type.name, size=attributes.size)
            return attributes, response
