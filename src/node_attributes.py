import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum

from http_exception import InvalidNodeIdException, UnableToResolveNodeIdException

NODE_ID_HEADER_KEY = "Node-Id"
NODE_TYPE_HEADER_KEY = "Node-Type"
NODE_SIZE_HEADER_KEY = "Node-Size"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# int() would also accept whitespace and underscores
_BASE_10_INTEGER = re.compile(r"[+-]?[0-9]+")


class NodeType(IntEnum):
    INVALID = 0
    DIRECTORY = 1
    FILE = 2

    @staticmethod
    def from_header_value(value: str | None) -> "NodeType":
        match value:
            case "directory":
                return NodeType.DIRECTORY
            case "file":
                return NodeType.FILE
            case _:
                return NodeType.INVALID

    @property
    def header_value(self) -> str:
        match self:
            case NodeType.DIRECTORY:
                return "directory"
            case NodeType.FILE:
                return "file"
            case _:
                return ""


def parse_int64(value: str | None) -> int | None:
    """Parse a base 10 signed 64 bit integer, None if it isn't one"""
    if value is None or not _BASE_10_INTEGER.fullmatch(value):
        return None
    parsed = int(value)
    if parsed < _INT64_MIN or parsed > _INT64_MAX:
        return None
    return parsed


@dataclass(frozen=True)
class NodeAttributes:
    """What the server told us about a node in a single response. Don't keep it around, it's stale as soon as anything changes."""

    node_id: int
    node_type: NodeType = NodeType.INVALID
    size: int = 0

    @staticmethod
    def from_headers(headers: Mapping[str, str]) -> "NodeAttributes":
        """Only use this for successful responses. The headers mapping is expected to be case-insensitive, as both requests and httpx provide."""

        node_id_text = headers.get(NODE_ID_HEADER_KEY)
        if not node_id_text:
            raise UnableToResolveNodeIdException()

        node_id = parse_int64(node_id_text)
        if node_id is None:
            raise InvalidNodeIdException(node_id_text)

        size = parse_int64(headers.get(NODE_SIZE_HEADER_KEY)) or 0
        node_type = NodeType.from_header_value(headers.get(NODE_TYPE_HEADER_KEY))

        return NodeAttributes(node_id, node_type, size)

    def to_headers(self) -> dict[str, str]:
        return {
            NODE_ID_HEADER_KEY: str(self.node_id),
            NODE_TYPE_HEADER_KEY: self.node_type.header_value,
            NODE_SIZE_HEADER_KEY: str(self.size),
        }

    @property
    def is_directory(self) -> bool:
        return self.node_type == NodeType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.node_type == NodeType.FILE
