"""
Jute Core Data Structures

Nodes live in an arena and are referenced by integer identity. Identities
are assigned in creation order, so every parent identity is smaller than the
identity of any of its children.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Tuple, Union

NodeId = int


class Edge(NamedTuple):
    """Dependency edge from a parent to the child that references it."""
    parent: NodeId
    child: NodeId

    def __repr__(self) -> str:
        return f"Edge({self.parent}->{self.child})"


@dataclass(frozen=True, slots=True)
class Node:
    """
    Immutable view of one DAG node.

    Children are not stored here: they are a derived back-reference kept by
    the graph store and can grow after the node is created.
    """
    id: NodeId
    parents: Tuple[NodeId, ...] = ()

    @property
    def is_root(self) -> bool:
        return not self.parents

    def edges(self) -> Tuple[Edge, ...]:
        """Incoming edges of this node."""
        return tuple(Edge(parent, self.id) for parent in self.parents)

    def __repr__(self) -> str:
        return f"Node({self.id}, parents={list(self.parents)})"


NodeRef = Union[Node, NodeId]


def resolve_node_id(ref: NodeRef) -> NodeId:
    """Accept a Node or a raw identity and return the identity."""
    if isinstance(ref, Node):
        return ref.id
    if isinstance(ref, int) and not isinstance(ref, bool):
        return ref
    raise TypeError(f"Expected Node or int identity, got {type(ref).__name__}")


@dataclass(frozen=True, slots=True)
class GraphSnapshot:
    """
    Read-only copy of the parent relation at one point in time.

    Parent tuples are immutable, so copying the outer sequence is enough to
    isolate a query from later appends.
    """
    parents: Tuple[Tuple[NodeId, ...], ...] = ()

    @property
    def size(self) -> int:
        return len(self.parents)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self.parents)

    def parents_of(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        return self.parents[node_id]
