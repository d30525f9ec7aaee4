"""
Jute Vote Graph

Relative vote graph of a tip: the tip's ancestor set plus an integer weight
on every edge inside it.

Weight of edge (p, c) = number of ancestors of tip that build on c, i.e.
nodes forward-reachable from c inside the ancestor set, c excluded. The tip
has nothing built on it inside its own history but always endorses its
parent edges, so those edges weigh 1.

Reachable sets are computed once per node in reverse topological order and
reused for every edge ending at that node. Sets are integer bitmasks, so a
reconverging path contributes a node once no matter how many routes lead
to it.
"""

from __future__ import annotations
import logging
from typing import Dict, FrozenSet, List, Mapping, NamedTuple, Sequence, Tuple, TYPE_CHECKING

from jute.constants import TIP_SELF_VOTE
from jute.core.reachability import collect_ancestors, popcount, reach_masks
from jute.core.types import Edge, GraphSnapshot, NodeId, NodeRef, resolve_node_id
from jute.errors import UnreachableTipError

if TYPE_CHECKING:
    from jute.core.graph import BlockDAG

logger = logging.getLogger(__name__)


class VoteGraph(NamedTuple):
    """Ancestor set and edge weights of one tip."""
    ancestors: FrozenSet[NodeId]
    weights: Dict[Edge, int]

    def triples(self) -> List[Tuple[NodeId, NodeId, int]]:
        """(parent, child, weight) triples sorted by child, then parent."""
        return sorted(
            ((edge.parent, edge.child, weight) for edge, weight in self.weights.items()),
            key=lambda t: (t[1], t[0]),
        )

    def support(self, node_id: NodeId) -> int:
        """Aggregate weight of the edges entering node_id."""
        return sum(w for edge, w in self.weights.items() if edge.child == node_id)

    def total_weight(self) -> int:
        return sum(self.weights.values())


def edge_votes(reach_mask: int, is_tip: bool) -> int:
    """
    Votes carried by every edge entering a node.

    Args:
        reach_mask: inclusive forward-reachable set of the node, restricted
            to the tip's ancestors
        is_tip: whether the node is the tip itself

    Returns:
        Number of nodes building on the node, or the tip's own vote
    """
    if is_tip:
        return TIP_SELF_VOTE
    return popcount(reach_mask) - 1


def assemble_vote_graph(
    tip: NodeId,
    ancestors: Sequence[NodeId],
    parents: Mapping[NodeId, Tuple[NodeId, ...]],
    reach: Mapping[NodeId, int],
) -> VoteGraph:
    """Turn per-node reach masks into per-edge weights."""
    weights: Dict[Edge, int] = {}

    for child in ancestors:
        votes = edge_votes(reach[child], child == tip)
        for parent in parents[child]:
            weights[Edge(parent, child)] = votes

    return VoteGraph(frozenset(ancestors), weights)


def votes_from_snapshot(snapshot: GraphSnapshot, tip: NodeId) -> VoteGraph:
    """
    Compute the vote graph from scratch on a copy of the graph.

    1. Collect the ancestor set with an explicit work-list
    2. Walk the set children first and OR reach masks upwards
    """
    if tip not in snapshot:
        raise UnreachableTipError(tip)

    ancestors = collect_ancestors(snapshot.parents_of, tip)
    parents = {node: snapshot.parents_of(node) for node in ancestors}
    reach = reach_masks(ancestors, snapshot.parents_of)

    return assemble_vote_graph(tip, ancestors, parents, reach)


class VoteGraphBuilder:
    """
    Computes relative vote graphs for a BlockDAG.

    Uses the graph's incremental reachability index when it has one and
    falls back to a from-scratch pass over a snapshot otherwise. Both
    strategies yield identical vote graphs.
    """

    def __init__(self, dag: "BlockDAG"):
        self._dag = dag

    def compute(self, tip: NodeRef) -> VoteGraph:
        """
        Compute ancestors and edge weights of tip.

        Raises:
            UnreachableTipError: tip is not in the graph
        """
        tip_id = resolve_node_id(tip)

        if self._dag.index is None:
            votes = votes_from_snapshot(self._dag.snapshot(), tip_id)
        else:
            votes = self._compute_indexed(tip_id)

        logger.debug(
            f"Vote graph for tip {tip_id}: {len(votes.ancestors)} ancestors, "
            f"{len(votes.weights)} edges"
        )
        return votes

    def compute_from_scratch(self, tip: NodeRef) -> VoteGraph:
        """Compute without the incremental index."""
        return votes_from_snapshot(self._dag.snapshot(), resolve_node_id(tip))

    def _compute_indexed(self, tip: NodeId) -> VoteGraph:
        dag = self._dag
        index = dag.index

        with dag.lock:
            if tip not in dag:
                raise UnreachableTipError(tip)

            ancestors = index.ancestors(tip)
            parents = {node: index.parents_of(node) for node in ancestors}

        # Parent tuples are immutable, masks need no lock
        reach = reach_masks(ancestors, parents.__getitem__)
        return assemble_vote_graph(tip, ancestors, parents, reach)

