"""
Jute Reachability Index

Reachability inside a tip's history, with sets kept as integer bitmasks.

Masks are rank-compressed: bit i stands for the i-th ancestor of the tip in
ascending identity, so a mask is as wide as the tip's history, never the
whole graph. Nothing graph-wide is kept per node besides its parents, so
appending a node costs O(1).
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Sequence, Tuple

from jute.core.types import NodeId

logger = logging.getLogger(__name__)

ParentLookup = Callable[[NodeId], Sequence[NodeId]]


def popcount(mask: int) -> int:
    """Count number of set bits in a mask."""
    return mask.bit_count()


# ==============================================================================
# History walks
# ==============================================================================

def collect_ancestors(parents_of: ParentLookup, tip: NodeId) -> List[NodeId]:
    """
    Tip plus everything reachable through parent edges, ascending.

    Ascending identity is a topological order since parents always
    predate their children.
    """
    seen = {tip}
    stack = [tip]

    while stack:
        node = stack.pop()
        for parent in parents_of(node):
            if parent not in seen:
                seen.add(parent)
                stack.append(parent)

    return sorted(seen)


def reach_masks(
    ancestors: Sequence[NodeId],
    parents_of: ParentLookup,
) -> Dict[NodeId, int]:
    """
    Forward-reachable set of every node inside an ancestor set.

    Walks the set in descending identity (children first) and ORs the
    children's masks into each node's own rank bit. A reconverging path
    contributes a node once no matter how many routes lead to it.

    Args:
        ancestors: ascending ancestor set of one tip, closed under parents
        parents_of: parent lookup for nodes of the set

    Returns:
        node -> inclusive reach mask over ranks in ancestors
    """
    rank = {node: i for i, node in enumerate(ancestors)}

    children: Dict[NodeId, List[NodeId]] = {node: [] for node in ancestors}
    for node in ancestors:
        for parent in parents_of(node):
            children[parent].append(node)

    reach: Dict[NodeId, int] = {}
    for node in reversed(ancestors):
        mask = 1 << rank[node]
        for child in children[node]:
            mask |= reach[child]
        reach[node] = mask

    return reach


class ReachabilityIndex:
    """
    Append-only parent index queried in place.

    Shares the parent tuples of the graph arena. Queries walk only the
    history of the tip they are asked about, so their cost follows the
    ancestor count rather than the graph size.
    """

    def __init__(self):
        self._parents: List[Tuple[NodeId, ...]] = []

    def __len__(self) -> int:
        return len(self._parents)

    def add(self, node_id: NodeId, parents: Tuple[NodeId, ...]) -> None:
        """Register a freshly appended node."""
        if node_id != len(self._parents):
            raise ValueError(
                f"Out of order append: got {node_id}, expected {len(self._parents)}"
            )

        self._parents.append(parents)

    def parents_of(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        return self._parents[node_id]

    def ancestors(self, tip: NodeId) -> List[NodeId]:
        """Inclusive ancestor set of tip, ascending."""
        return collect_ancestors(self.parents_of, tip)

