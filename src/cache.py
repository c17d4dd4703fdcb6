import io
import threading
from typing import BinaryIO

import structlog


def content_window(content: bytes, offset: int, size: int) -> bytes:
    """A size of -1 means everything from the offset onwards"""
    end = len(content) if size < 0 else offset + size
    return content[offset:end]


class EntityDoesNotExistException(Exception):
    """The cache has nothing for the node. Any other exception from a cache means the cache itself failed."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Node {node_id} is not cached")


class Cache:
    """
    Node content storage that can be read in (offset, size) windows.
    Implementations MUST be safe to use from several threads at once.
    A 'get' after a 'put' for the same node, with no 'evict' between them, sees the content that was put.
    """

    def get(self, node_id: int, offset: int, size: int) -> BinaryIO:
        """A size of -1 means everything from the offset onwards. Raises EntityDoesNotExistException when not cached."""
        pass

    def put(self, node_id: int, reader: BinaryIO) -> None:
        pass

    def evict(self, node_id: int) -> None:
        pass


class NullCache(Cache):
    def get(self, node_id: int, offset: int, size: int) -> BinaryIO:
        raise EntityDoesNotExistException(node_id)

    def put(self, node_id: int, reader: BinaryIO) -> None:
        pass

    def evict(self, node_id: int) -> None:
        pass


class MemoryCache(Cache):
    """Keeps whole node contents in memory. Nothing is ever evicted unless asked."""

    def __init__(self) -> None:
        self._logger = structlog.getLogger(self.__class__.__name__)
        self._lock = threading.Lock()
        self._content: dict[int, bytes] = {}

    def get(self, node_id: int, offset: int, size: int) -> BinaryIO:
        with self._lock:
            content = self._content.get(node_id)

        if content is None:
            raise EntityDoesNotExistException(node_id)

        window = content_window(content, offset, size)
        self._logger.debug("Returning from cache", node_id=node_id, offset=offset, size=size, returning_size=len(window))
        return io.BytesIO(window)

    def put(self, node_id: int, reader: BinaryIO) -> None:
        # Read outside the lock, the reader may be slow
        content = reader.read()
        with self._lock:
            self._content[node_id] = content
        self._logger.debug("Cached content", node_id=node_id, size=len(content))

    def evict(self, node_id: int) -> None:
        with self._lock:
            self._content.pop(node_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._content)


class CacheFactory:
    @staticmethod
    def get_cache(content_caching: bool) -> Cache:
        if content_caching:
            return MemoryCache()

        return NullCache()
