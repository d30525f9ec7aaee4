"""
Jute Vote Graph Tests
"""

import networkx as nx
import pytest

from jute import consensus
from jute.config import GraphConfig
from jute.consensus.votes import edge_votes, votes_from_snapshot
from jute.core.graph import BlockDAG
from jute.core.types import Edge
from jute.demo.topologies import TOPOLOGIES

from conftest import to_networkx


def expected_weights(dag, tip):
    """Vote weights recomputed with networkx."""
    G = to_networkx(dag)
    ancestors = nx.ancestors(G, tip) | {tip}
    sub = G.subgraph(ancestors)
    return {
        (parent, child): 1 if child == tip else len(nx.descendants(sub, child))
        for parent, child in sub.edges()
    }


class TestDiamond:
    """Tests for the two-root diamond."""

    def test_ancestor_set(self, diamond, dag):
        """Test every node is an ancestor of D."""
        ancestors, _ = dag.compute_votes(diamond["D"])
        assert ancestors == {n.id for n in diamond.values()}

    def test_weights(self, diamond, dag):
        """Test all four edges carry one vote."""
        n = {label: node.id for label, node in diamond.items()}
        _, weights = dag.compute_votes(diamond["D"])

        assert weights == {
            (n["G1"], n["A"]): 1,
            (n["A"], n["D"]): 1,
            (n["G2"], n["B"]): 1,
            (n["B"], n["D"]): 1,
        }
        assert (n["G1"], n["G2"]) not in weights

    def test_intermediate_tip(self, diamond, dag):
        """Test votes are relative to the chosen tip."""
        ancestors, weights = dag.compute_votes(diamond["A"])
        assert ancestors == {diamond["G1"].id, diamond["A"].id}
        assert weights == {(diamond["G1"].id, diamond["A"].id): 1}

    def test_root_tip(self, diamond, dag):
        """Test a root tip has no edges."""
        votes = dag.compute_votes(diamond["G2"])
        assert votes.ancestors == {diamond["G2"].id}
        assert votes.weights == {}


class TestMergingChain:
    """Tests for branches of different depth."""

    def test_deeper_branch_weighs_more(self, merging_chain, dag):
        """Test (G,A) is corroborated by C and M, (G,B) only by M."""
        n = {label: node.id for label, node in merging_chain.items()}
        _, weights = dag.compute_votes(merging_chain["M"])

        assert weights[(n["G"], n["A"])] == 2
        assert weights[(n["G"], n["B"])] == 1
        assert weights[(n["A"], n["C"])] == 1
        assert weights[(n["B"], n["M"])] == 1
        assert weights[(n["C"], n["M"])] == 1
        assert len(weights) == 5

    def test_side_branch_excluded(self, merging_chain, dag):
        """Test nodes outside the tip's history contribute nothing."""
        n = {label: node.id for label, node in merging_chain.items()}
        ancestors, weights = dag.compute_votes(merging_chain["C"])

        assert ancestors == {n["G"], n["A"], n["C"]}
        assert weights == {(n["G"], n["A"]): 1, (n["A"], n["C"]): 1}


class TestReconvergence:
    """Tests that shared descendants are counted once."""

    def test_nested_diamonds(self, dag):
        """Test stacked diamonds do not double count through both sides."""
        g = dag.create_root()
        top = g
        for _ in range(10):
            left = dag.create_node([top])
            right = dag.create_node([top])
            top = dag.create_node([left, right])

        _, weights = dag.compute_votes(top)
        # Node 1 is built on by node 3 and all 27 later nodes; counting
        # paths instead of nodes would grow with 2**10
        assert weights[(g.id, 1)] == 28
        assert weights[(g.id, 2)] == 28
        assert max(weights.values()) == 28

    def test_matches_networkx_oracle(self, wide_fan_in, dag):
        """Test weights agree with an independent descendant count."""
        tip = wide_fan_in["F"].id
        _, weights = dag.compute_votes(tip)
        assert weights == expected_weights(dag, tip)


class TestIdempotentParents:
    """Tests that duplicate parents do not change the vote graph."""

    def test_duplicate_parent_same_votes(self, graph_config):
        """Test [x, y] and [x, y, y] give identical edges and weights."""
        results = []
        for parents in ([0, 1], [0, 1, 1]):
            dag = BlockDAG(graph_config)
            dag.create_root()
            dag.create_root()
            node = dag.create_node(parents)
            top = dag.create_node([node])
            results.append((dag.edges(), dag.compute_votes(top)))

        assert results[0] == results[1]


class TestDeterminism:
    """Tests for repeatable results."""

    def test_repeated_calls(self, wide_fan_in, dag):
        """Test two calls on an unmodified graph agree."""
        first = dag.compute_votes(wide_fan_in["F"])
        second = dag.compute_votes(wide_fan_in["F"])
        assert first == second
        assert list(first.weights) == list(second.weights)

    @pytest.mark.parametrize("name", sorted(TOPOLOGIES))
    def test_strategies_agree(self, name):
        """Test indexed and from-scratch computation give the same result."""
        indexed = TOPOLOGIES[name](GraphConfig(incremental_index=True))
        scratch = TOPOLOGIES[name](GraphConfig(incremental_index=False))

        a = indexed.dag.compute_votes(indexed.tip)
        b = scratch.dag.compute_votes(scratch.tip)
        assert a == b
        assert list(a.weights) == list(b.weights)
        assert a == votes_from_snapshot(indexed.dag.snapshot(), indexed.tip.id)

    @pytest.mark.parametrize("name", sorted(TOPOLOGIES))
    def test_topologies_match_oracle(self, name):
        """Test every demo topology against networkx."""
        scenario = TOPOLOGIES[name](None)
        _, weights = scenario.dag.compute_votes(scenario.tip)
        assert weights == expected_weights(scenario.dag, scenario.tip.id)


class TestVoteGraph:
    """Tests for the VoteGraph container."""

    def test_unpacks(self, diamond, dag):
        """Test tuple unpacking into ancestors and weights."""
        ancestors, weights = dag.compute_votes(diamond["D"])
        assert isinstance(ancestors, frozenset)
        assert isinstance(weights, dict)

    def test_triples_sorted(self, merging_chain, dag):
        """Test triples are sorted by child then parent."""
        votes = dag.compute_votes(merging_chain["M"])
        assert votes.triples() == [(0, 1, 2), (0, 2, 1), (1, 3, 1), (2, 4, 1), (3, 4, 1)]

    def test_support(self, merging_chain, dag):
        """Test aggregate incoming weight."""
        votes = dag.compute_votes(merging_chain["M"])
        assert votes.support(merging_chain["M"].id) == 2
        assert votes.support(merging_chain["A"].id) == 2
        assert votes.support(merging_chain["G"].id) == 0
        assert votes.total_weight() == 6

    def test_edge_keys(self, diamond, dag):
        """Test weight keys are Edge tuples."""
        votes = dag.compute_votes(diamond["D"])
        assert all(isinstance(edge, Edge) for edge in votes.weights)

    def test_edge_votes(self):
        """Test votes per edge from a reach mask."""
        assert edge_votes(0b111, is_tip=False) == 2
        assert edge_votes(0b1, is_tip=True) == 1

    def test_builder_paths_agree(self, merging_chain, dag):
        """Test the builder's from-scratch path matches its default path."""
        builder = dag._votes
        assert builder.compute_from_scratch(merging_chain["M"]) == builder.compute(merging_chain["M"])

    def test_package_exports(self):
        """Test every name exported by jute.consensus exists; queries go through BlockDAG."""
        for name in consensus.__all__:
            assert hasattr(consensus, name)
        assert "compute_votes" not in consensus.__all__
        assert "linear_order" not in consensus.__all__
