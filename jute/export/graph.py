"""
Jute networkx Export

Converts a vote graph and its ordering into a networkx DiGraph so that any
networkx-compatible tool can draw it, and writes it out as GraphML.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

import networkx as nx

from jute.constants import ORDER_SEPARATOR
from jute.consensus.ordering import linearize
from jute.consensus.votes import VoteGraph
from jute.core.types import NodeId, NodeRef
from jute.export.sage import relative_ordering_title

logger = logging.getLogger(__name__)


def to_digraph(
    votes: VoteGraph,
    order: Optional[List[NodeId]] = None,
    separator: str = ORDER_SEPARATOR,
) -> nx.DiGraph:
    """
    Build a DiGraph of the vote graph.

    Nodes carry their position in the ordering, edges their weight and the
    graph its title.
    """
    if order is None:
        order = linearize(votes)

    G = nx.DiGraph(title=relative_ordering_title(order, separator))
    for position, node in enumerate(order):
        G.add_node(node, position=position)
    for parent, child, weight in votes.triples():
        G.add_edge(parent, child, weight=weight)

    return G


def write_graphml(
    dag,
    tip: NodeRef,
    path: Union[str, Path],
    separator: str = ORDER_SEPARATOR,
) -> nx.DiGraph:
    """Write the vote graph of tip to a GraphML file."""
    G = to_digraph(dag.compute_votes(tip), separator=separator)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    nx.write_graphml(G, path)

    logger.info(f"GraphML written to {path} ({G.number_of_nodes()} nodes)")
    return G
