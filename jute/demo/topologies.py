"""
Jute Demo Topologies

Named graphs exercising the ordering: symmetric diamonds, branches of
unequal length, wide fan-in layers and adversarial shapes that try to pull
the ordering toward a short or late branch.

Every GENESIS reference creates a fresh root, so a graph built from several
GENESIS references has several independent origins.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from jute.config import GraphConfig
from jute.core.graph import BlockDAG
from jute.core.types import Node

GENESIS = "genesis"


@dataclass
class Scenario:
    """A built topology and the tip it is ordered from."""
    title: str
    dag: BlockDAG
    tip: Node
    nodes: Dict[str, Node] = field(default_factory=dict)

    def ids(self, *labels: str) -> List[int]:
        return [self.nodes[label].id for label in labels]


class ScenarioBuilder:
    """Small helper to write topologies by label."""

    def __init__(self, config: Optional[GraphConfig] = None):
        self.dag = BlockDAG(config)
        self.nodes: Dict[str, Node] = {}

    def add(self, label: str, *parents: str) -> Node:
        refs = [
            self.dag.create_root() if parent == GENESIS else self.nodes[parent]
            for parent in parents
        ]
        node = self.dag.create_node(refs)
        self.nodes[label] = node
        return node

    def chain(self, labels: List[str], parent: str) -> Node:
        """Append a sequential branch below parent."""
        node = None
        for label in labels:
            node = self.add(label, parent)
            parent = label
        return node

    def finish(self, title: str, tip: str) -> Scenario:
        return Scenario(title, self.dag, self.nodes[tip], dict(self.nodes))


def _labels(prefix: str, first: int, last: int) -> List[str]:
    return [f"{prefix}{i}" for i in range(first, last + 1)]


# ==============================================================================
# Topologies
# ==============================================================================

def build_diamond(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    b.add("d1", GENESIS)
    b.add("d2", GENESIS)
    b.add("d3", "d1", "d2")
    return b.finish("Diamond Graph", "d3")


def build_pentagon(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    b.add("p1", GENESIS)
    b.add("p2", GENESIS)
    b.add("p3", "p1")
    b.add("p4", "p2", "p3")
    return b.finish("Pentagon Graph", "p4")


def build_double_diamond(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    b.add("dd1", GENESIS)
    b.add("dd2", GENESIS)
    b.add("dd3", "dd1", "dd2")
    b.add("dd4", "dd2")
    b.add("dd5", "dd3", "dd4")
    return b.finish("Double Diamond Graph", "dd5")


def build_nested_diamond(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    b.add("nd1", GENESIS)
    b.add("nd2", GENESIS)
    b.add("nd3", "nd1")
    b.add("nd4", "nd1", "nd2")
    b.add("nd5", "nd2")
    b.add("nd6", "nd3", "nd4")
    b.add("nd7", "nd4", "nd5")
    b.add("nd8", "nd6", "nd7")
    b.chain(_labels("nd", 9, 11), "nd8")
    return b.finish("Nested Diamond Graph", "nd11")


def build_ongoing(config: Optional[GraphConfig] = None) -> Scenario:
    """Five roots, four layers of overlapping merges, one final node."""
    b = ScenarioBuilder(config)
    for i in range(1, 6):
        b.add(f"o{i}", GENESIS)

    previous = _labels("o", 1, 5)
    for layer in range(1, 5):
        current = []
        for i in range(1, 6):
            label = f"o{layer}{i}"
            # Overlapping windows of up to three parents; the last one
            # repeats its final parent on purpose (deduplicated to one edge)
            window = previous[max(0, i - 2):i + 1]
            if i == 5:
                window = window + [previous[-1]]
            b.add(label, *window)
            current.append(label)
        previous = current

    b.add("o51", *previous)
    return b.finish("Ongoing Graph", "o51")


def build_impossibility_proof(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    b.add("ip1", GENESIS)
    b.add("ip2", GENESIS)
    b.add("ip3", "ip1")
    b.add("ip4", "ip2")
    b.add("ip5", "ip3")
    b.add("ip6", "ip4", "ip5")
    b.add("ip7", "ip4")
    b.chain(_labels("ip", 8, 10), "ip7")
    b.add("ip11", "ip10", "ip6")
    return b.finish("Impossibility Proof Graph", "ip11")


def build_abstain(config: Optional[GraphConfig] = None) -> Scenario:
    """A short and a long branch that only meet at the tip."""
    b = ScenarioBuilder(config)
    b.add("a1", GENESIS)
    b.chain(_labels("a", 2, 5), "a1")
    b.add("a6", GENESIS)
    b.chain(_labels("a", 7, 17), "a6")
    b.add("a18", "a17", "a5")
    return b.finish("Abstain Graph", "a18")


def build_leech(config: Optional[GraphConfig] = None) -> Scenario:
    """A side chain that keeps referencing the main chain from behind."""
    b = ScenarioBuilder(config)
    main = _labels("l", 1, 12)
    b.add(main[0], GENESIS)
    b.chain(main[1:], main[0])

    b.add("ld", GENESIS)
    leech = ["le", "lf", "lg", "lh", "li", "lj", "lk"]
    anchors = ["l2", "l3", "l5", "l7", "l8", "l9", "l11"]
    previous = "ld"
    for label, anchor in zip(leech, anchors):
        b.add(label, previous, anchor)
        previous = label

    b.add("lm", "lk", "l12")
    return b.finish("Leech Graph", "lm")


def build_low_latency_adversary(config: Optional[GraphConfig] = None) -> Scenario:
    b = ScenarioBuilder(config)
    for i in range(1, 6):
        b.add(f"lla{i}", GENESIS)
    b.add("lla6", "lla5")
    b.add("lla7", "lla1", "lla2", "lla3", "lla4", "lla6")
    b.add("lla8", "lla6")
    b.add("lla9", "lla8")
    b.add("lla10", "lla7", "lla9")
    return b.finish("Low Latency Adversary Graph", "lla10")


TOPOLOGIES: Dict[str, Callable[[Optional[GraphConfig]], Scenario]] = {
    "diamond": build_diamond,
    "pentagon": build_pentagon,
    "double-diamond": build_double_diamond,
    "nested-diamond": build_nested_diamond,
    "ongoing": build_ongoing,
    "impossibility-proof": build_impossibility_proof,
    "abstain": build_abstain,
    "leech": build_leech,
    "low-latency-adversary": build_low_latency_adversary,
}


def build(name: str, config: Optional[GraphConfig] = None) -> Scenario:
    """Build a topology by name."""
    try:
        builder = TOPOLOGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown topology: {name} (choose from {', '.join(TOPOLOGIES)})"
        ) from None
    return builder(config)


def build_all(config: Optional[GraphConfig] = None) -> List[Tuple[str, Scenario]]:
    return [(name, builder(config)) for name, builder in TOPOLOGIES.items()]
