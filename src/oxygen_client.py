from typing import BinaryIO

from content_stream import ContentStream
from node_attributes import NodeAttributes

ROOT_NODE_ID = 1


class OxygenClient:
    """Operations on the nodes of an Oxygen service. Clients must be safe to use from several threads at once."""

    def resolve_path_from_node(self, start_node: int, path: str) -> NodeAttributes:
        """Resolve the attributes of the node at path, starting from start_node"""
        pass

    def resolve_path(self, path: str) -> NodeAttributes:
        """Like resolve_path_from_node but starts from the root node"""
        pass

    def resolve_node(self, node_id: int) -> NodeAttributes:
        pass

    def read_node(self, node_id: int, offset: int = 0, size: int = -1) -> tuple[NodeAttributes, ContentStream]:
        """
        Read the content of the node from offset. A size of -1 means no limit.
        The returned stream must be closed by the caller.
        """
        pass

    def read_path(self, path: str, offset: int = 0, size: int = -1) -> tuple[NodeAttributes, ContentStream]:
        """Like read_node but with a path. The returned stream must be closed by the caller."""
        pass

    def overwrite_node(self, node_id: int, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        """Replace the content of the file. The offset MUST be 0 for now."""
        pass

    def overwrite_path(self, path: str, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        """Create or replace the content of the file. The offset MUST be 0 for now."""
        pass

    def overwrite_path_from_node(self, node_id: int, path: str, offset: int, data: bytes | BinaryIO) -> NodeAttributes:
        """Create or replace the content of the file under node_id. The offset MUST be 0 for now."""
        pass

    def create_path_from_node(self, node_id: int, path: str, data: bytes | BinaryIO | None) -> NodeAttributes:
        """Create a file or directory under node_id. Fails if something already exists there."""
        pass

    def create_path(self, path: str, data: bytes | BinaryIO | None) -> NodeAttributes:
        pass

    def delete_from_node(self, node_id: int, entry: str) -> None:
        """Delete the entry in the directory node_id"""
        pass

    def rename_from_node_to_node(self, old_node_id: int, old_name: str, new_node_id: int, new_name: str) -> None:
        """Move old_name in old_node_id to new_name in new_node_id, replacing anything already there"""
        pass
