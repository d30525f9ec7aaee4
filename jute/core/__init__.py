"""
Jute Core Data Structures

The graph store itself lives in jute.core.graph.
"""

from jute.core.types import Edge, Node, NodeId, NodeRef, GraphSnapshot, resolve_node_id
from jute.core.reachability import ReachabilityIndex, collect_ancestors, popcount, reach_masks

__all__ = [
    # Types
    "Edge",
    "Node",
    "NodeId",
    "NodeRef",
    "GraphSnapshot",
    "resolve_node_id",
    # Reachability
    "ReachabilityIndex",
    "popcount",
    "collect_ancestors",
    "reach_masks",
]
