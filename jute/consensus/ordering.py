"""
Jute Total Ordering

Linearizes a tip's ancestor set into one reproducible sequence.

Algorithm:
1. A node becomes eligible once all of its parents are placed
2. The nodes released by one placement form a frontier; frontiers are kept
   on a stack and the newest non-empty one is drawn from first, so a branch
   runs to its merge point before older candidates are revisited
3. Within a frontier, higher support (sum of incoming edge weights) wins,
   then the smaller identity
"""

from __future__ import annotations
import heapq
import logging
from collections import defaultdict
from typing import Dict, List, Tuple, TYPE_CHECKING

from jute.core.types import NodeId, NodeRef
from jute.consensus.votes import VoteGraph

if TYPE_CHECKING:
    from jute.consensus.votes import VoteGraphBuilder

logger = logging.getLogger(__name__)

# Heap entry: (-support, identity)
_Candidate = Tuple[int, NodeId]


def linearize(votes: VoteGraph) -> List[NodeId]:
    """
    Canonical total order of a vote graph's ancestor set.

    The result is a topological order: every parent precedes its children.

    Args:
        votes: Vote graph of a tip

    Returns:
        Permutation of votes.ancestors
    """
    pending: Dict[NodeId, int] = {node: 0 for node in votes.ancestors}
    support: Dict[NodeId, int] = defaultdict(int)
    children: Dict[NodeId, List[NodeId]] = defaultdict(list)

    for edge, weight in votes.weights.items():
        pending[edge.child] += 1
        support[edge.child] += weight
        children[edge.parent].append(edge.child)

    roots: List[_Candidate] = [(0, node) for node, count in pending.items() if count == 0]
    heapq.heapify(roots)
    frontiers: List[List[_Candidate]] = [roots]

    order: List[NodeId] = []
    while frontiers:
        frontier = frontiers[-1]
        if not frontier:
            frontiers.pop()
            continue

        _, node = heapq.heappop(frontier)
        order.append(node)

        released: List[_Candidate] = []
        for child in children[node]:
            pending[child] -= 1
            if pending[child] == 0:
                released.append((-support[child], child))

        if released:
            heapq.heapify(released)
            frontiers.append(released)

    if len(order) != len(votes.ancestors):
        # Only reachable with a vote graph that was not built from one tip
        raise ValueError(
            f"Vote graph is not closed under parents: placed {len(order)} "
            f"of {len(votes.ancestors)} nodes"
        )

    return order


class TotalOrderer:
    """Orders the history of a tip using its relative vote graph."""

    def __init__(self, builder: "VoteGraphBuilder"):
        self._builder = builder

    def order(self, tip: NodeRef) -> List[NodeId]:
        """
        Linear order of tip's ancestor set.

        Raises:
            UnreachableTipError: tip is not in the graph
        """
        votes = self._builder.compute(tip)
        order = linearize(votes)
        logger.debug(f"Ordered {len(order)} nodes ending at {order[-1]}")
        return order

