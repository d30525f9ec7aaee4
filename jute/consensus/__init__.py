"""
Jute Consensus

Relative vote graphs and the canonical ordering built on them.
"""

from jute.consensus.votes import (
    VoteGraph,
    VoteGraphBuilder,
    edge_votes,
    votes_from_snapshot,
)
from jute.consensus.ordering import (
    TotalOrderer,
    linearize,
)

__all__ = [
    # Votes
    "VoteGraph",
    "VoteGraphBuilder",
    "edge_votes",
    "votes_from_snapshot",
    # Ordering
    "TotalOrderer",
    "linearize",
]
