"""
Jute Test Fixtures
"""

import pytest
from typing import Dict, List

import networkx as nx

from jute.config import GraphConfig
from jute.core.graph import BlockDAG
from jute.core.types import Node


@pytest.fixture(params=[True, False], ids=["indexed", "scratch"])
def graph_config(request) -> GraphConfig:
    """Both reachability strategies; results must not depend on the choice."""
    return GraphConfig(incremental_index=request.param)


@pytest.fixture
def dag(graph_config) -> BlockDAG:
    """Create an empty DAG."""
    return BlockDAG(graph_config)


@pytest.fixture
def diamond(dag) -> Dict[str, Node]:
    """
    Two roots, one child each, merged by D.

        G1   G2
        |    |
        A    B
         \\  /
          D
    """
    g1 = dag.create_root()
    g2 = dag.create_root()
    a = dag.create_node([g1])
    b = dag.create_node([g2])
    d = dag.create_node([a, b])
    return {"G1": g1, "G2": g2, "A": a, "B": b, "D": d}


@pytest.fixture
def merging_chain(dag) -> Dict[str, Node]:
    """
    One root, a long and a short branch merged by M.

        G -> A -> C -> M
        G -> B -------> M
    """
    g = dag.create_root()
    a = dag.create_node([g])
    b = dag.create_node([g])
    c = dag.create_node([a])
    m = dag.create_node([b, c])
    return {"G": g, "A": a, "B": b, "C": c, "M": m}


@pytest.fixture
def wide_fan_in(dag) -> Dict[str, Node]:
    """Five independent roots feeding three merge layers and one final node."""
    nodes: Dict[str, Node] = {}
    previous: List[Node] = []
    for i in range(5):
        nodes[f"R{i}"] = dag.create_root()
        previous.append(nodes[f"R{i}"])

    for layer in range(3):
        current = []
        for i in range(5):
            node = dag.create_node(previous[max(0, i - 1):i + 2])
            nodes[f"L{layer}{i}"] = node
            current.append(node)
        previous = current

    nodes["F"] = dag.create_node(previous)
    return nodes


# ==============================================================================
# Helpers
# ==============================================================================

def to_networkx(dag: BlockDAG) -> nx.DiGraph:
    """Independent copy of the DAG for cross-checking."""
    G = nx.DiGraph()
    G.add_nodes_from(range(len(dag)))
    G.add_edges_from(dag.edges())
    return G


def assert_valid_order(votes, order):
    """Order is a permutation of the ancestor set and respects every edge."""
    assert len(order) == len(set(order))
    assert set(order) == set(votes.ancestors)

    position = {node: i for i, node in enumerate(order)}
    for parent, child in votes.weights:
        assert position[parent] < position[child]
