import io
from collections.abc import Callable, Iterable


class ContentStream(io.RawIOBase):
    """
    Readable stream over the body of a response.
    The connection behind it is only released when the stream is closed, so always close it, ideally with a 'with' block.
    """

    def __init__(self, chunks: Iterable[bytes], on_close: Callable[[], None] | None = None):
        super().__init__()
        self._chunks = iter(chunks)
        self._pending = b""
        self._on_close = on_close

    @staticmethod
    def from_bytes(content: bytes) -> "ContentStream":
        return ContentStream([content])

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")

        while not self._pending:
            chunk = next(self._chunks, None)
            if chunk is None:
                return 0
            self._pending = chunk

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            on_close, self._on_close = self._on_close, None
            try:
                if on_close:
                    on_close()
            finally:
                super().close()
