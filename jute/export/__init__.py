"""
Jute Export

Diagram adapters for computed vote graphs and orderings.
"""

from jute.export.sage import SageExporter, relative_ordering_title
from jute.export.graph import to_digraph, write_graphml

__all__ = [
    "SageExporter",
    "relative_ordering_title",
    "to_digraph",
    "write_graphml",
]
