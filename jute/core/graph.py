"""
Jute Block DAG Store

Append-only, multi-parent directed acyclic graph of blocks.

Features:
- Any number of independent roots (genesis nodes)
- Multiple parent references per node, duplicates collapsed to one edge
- Acyclic by construction: parents must exist before the child
- Per-tip vote weighting and canonical ordering (see jute.consensus)
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from jute.config import GraphConfig
from jute.consensus.ordering import TotalOrderer
from jute.consensus.votes import VoteGraph, VoteGraphBuilder
from jute.core.reachability import ReachabilityIndex
from jute.core.types import (
    Edge,
    GraphSnapshot,
    Node,
    NodeId,
    NodeRef,
    resolve_node_id,
)
from jute.errors import EmptyParentSetError, UnknownParentError, UnreachableTipError

logger = logging.getLogger(__name__)


class BlockDAG:
    """
    Arena of DAG nodes referenced by integer identity.

    Mutations (create_root, create_node) are serialized by a lock and either
    complete fully or leave the graph untouched. Queries read an immutable
    snapshot, or the incremental reachability index, taken under the same
    lock and then compute without holding it.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()

        # Arena: index == identity
        self._parents: List[Tuple[NodeId, ...]] = []
        self._children: List[List[NodeId]] = []

        self.index: Optional[ReachabilityIndex] = (
            ReachabilityIndex() if self.config.incremental_index else None
        )

        self.lock = threading.RLock()

        self._votes = VoteGraphBuilder(self)
        self._orderer = TotalOrderer(self._votes)

    # ==========================================================================
    # Mutations
    # ==========================================================================

    def create_root(self) -> Node:
        """Create a new root node. Repeatable; every call yields a new root."""
        with self.lock:
            node_id = self._append(())

        logger.debug(f"Created root {node_id}")
        return Node(node_id)

    def create_node(self, parents: Sequence[NodeRef]) -> Node:
        """
        Create a node referencing existing parents.

        Duplicate parents collapse to a single edge; the first occurrence
        fixes the position in the parent tuple.

        Raises:
            EmptyParentSetError: parents is empty
            UnknownParentError: a parent identity is not in the graph
            TypeError: a reference is neither a Node nor an int
        """
        refs = list(parents)
        if not refs:
            logger.debug("Rejected node: empty parent set")
            raise EmptyParentSetError()

        parent_ids = list(dict.fromkeys(resolve_node_id(ref) for ref in refs))

        with self.lock:
            for parent_id in parent_ids:
                if not self._contains(parent_id):
                    logger.debug(f"Rejected node: unknown parent {parent_id}")
                    raise UnknownParentError(parent_id)

            node_id = self._append(tuple(parent_ids))

        if len(parent_ids) != len(refs):
            logger.debug(f"Node {node_id}: collapsed {len(refs) - len(parent_ids)} duplicate parents")
        logger.debug(f"Created node {node_id} with parents {parent_ids}")
        return Node(node_id, tuple(parent_ids))

    def _append(self, parent_ids: Tuple[NodeId, ...]) -> NodeId:
        """Append a validated node. Caller holds the lock."""
        node_id = len(self._parents)

        self._parents.append(parent_ids)
        self._children.append([])
        for parent_id in parent_ids:
            self._children[parent_id].append(node_id)

        if self.index is not None:
            self.index.add(node_id, parent_ids)

        return node_id

    # ==========================================================================
    # Structure queries
    # ==========================================================================

    def _contains(self, node_id: NodeId) -> bool:
        return 0 <= node_id < len(self._parents)

    def __contains__(self, ref: object) -> bool:
        try:
            node_id = resolve_node_id(ref)
        except TypeError:
            return False
        with self.lock:
            return self._contains(node_id)

    def __len__(self) -> int:
        with self.lock:
            return len(self._parents)

    def _require(self, node_id: NodeId) -> None:
        if not self._contains(node_id):
            raise UnreachableTipError(node_id)

    def node(self, ref: NodeRef) -> Node:
        """Get node by identity."""
        node_id = resolve_node_id(ref)
        with self.lock:
            self._require(node_id)
            return Node(node_id, self._parents[node_id])

    def parents(self, ref: NodeRef) -> Tuple[NodeId, ...]:
        """Parent identities of a node."""
        return self.node(ref).parents

    def children(self, ref: NodeRef) -> Tuple[NodeId, ...]:
        """Children registered so far, in creation order."""
        node_id = resolve_node_id(ref)
        with self.lock:
            self._require(node_id)
            return tuple(self._children[node_id])

    def roots(self) -> List[NodeId]:
        """All nodes without parents."""
        with self.lock:
            return [i for i, parents in enumerate(self._parents) if not parents]

    def tips(self) -> List[NodeId]:
        """All nodes without children."""
        with self.lock:
            return [i for i, children in enumerate(self._children) if not children]

    def edges(self) -> List[Edge]:
        """Every edge in the graph, ordered by child then parent position."""
        with self.lock:
            return [
                Edge(parent, child)
                for child, parents in enumerate(self._parents)
                for parent in parents
            ]

    def snapshot(self) -> GraphSnapshot:
        """Immutable copy of the parent relation."""
        with self.lock:
            return GraphSnapshot(tuple(self._parents))

    # ==========================================================================
    # Consensus queries
    # ==========================================================================

    def compute_votes(self, tip: NodeRef) -> VoteGraph:
        """Ancestor set and edge weights relative to tip. See VoteGraphBuilder."""
        return self._votes.compute(tip)

    def linear_order(self, tip: NodeRef) -> List[NodeId]:
        """Canonical total order of tip's ancestor set. See TotalOrderer."""
        return self._orderer.order(tip)

    def stats(self) -> Dict[str, int]:
        """Get graph size information."""
        with self.lock:
            return {
                "nodes": len(self._parents),
                "edges": sum(len(p) for p in self._parents),
                "roots": sum(1 for p in self._parents if not p),
                "tips": sum(1 for c in self._children if not c),
            }

    def __repr__(self) -> str:
        return f"BlockDAG(nodes={len(self)})"
