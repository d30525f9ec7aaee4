"""
Jute Block-DAG Ordering

Vote weighting and canonical total ordering for multi-parent block DAGs.

Every node may reference several parents. Given a tip, the library weighs
each edge of the tip's history by how many later blocks build on it and
linearizes that history into one reproducible sequence.
"""

__version__ = "0.1.0"
__author__ = "Jute Ordering"

from jute.core.graph import BlockDAG
from jute.core.types import Edge, Node
from jute.consensus.votes import VoteGraph
from jute.errors import (
    JuteError,
    UnknownParentError,
    EmptyParentSetError,
    UnreachableTipError,
)

__all__ = [
    "BlockDAG",
    "Edge",
    "Node",
    "VoteGraph",
    "JuteError",
    "UnknownParentError",
    "EmptyParentSetError",
    "UnreachableTipError",
    "__version__",
]
