"""
Jute SageMath Export

Renders a tip's vote graph as a SageMath script that plots the DAG with
edge weights as labels and saves the picture under a file named after the
relative ordering.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import IO, Iterable, List, Optional, Union

from jute.config import ExportConfig
from jute.constants import ORDER_SEPARATOR, PLOT_SUFFIX
from jute.consensus.ordering import linearize
from jute.consensus.votes import VoteGraph
from jute.core.types import NodeId, NodeRef

logger = logging.getLogger(__name__)


def relative_ordering_title(order: Iterable[NodeId], separator: str = ORDER_SEPARATOR) -> str:
    """Join ordered identities into a display title, e.g. "0-2-1-3-4"."""
    return separator.join(str(node) for node in order)


class SageExporter:
    """
    Builds SageMath plotting scripts.

    The exporter only reads the vote graph and ordering; it never inspects
    or changes the DAG itself.
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()

    def script(self, votes: VoteGraph, order: List[NodeId]) -> str:
        """Script for an already computed vote graph and ordering."""
        cfg = self.config
        title = relative_ordering_title(order, cfg.separator)
        figsize = f"({cfg.figsize[0]},{cfg.figsize[1]})"
        filename = f"{cfg.output_dir.rstrip('/')}/{title}{PLOT_SUFFIX}"

        lines = ["G = DiGraph()"]
        for parent, child, weight in votes.triples():
            lines.append(f"G.add_edge({parent}, {child}, {weight})")
        lines.append(
            f"H = G.plot(edge_labels=True, layout='{cfg.layout}', edge_color='{cfg.edge_color}')"
        )
        lines.append(f'H.show(title="{title}", figsize={figsize})')
        lines.append(f'H.save(filename="{filename}", title="{title}", figsize={figsize})')

        return "\n".join(lines) + "\n"

    def render(self, dag, tip: NodeRef) -> str:
        """Script for the history of tip."""
        votes = dag.compute_votes(tip)
        return self.script(votes, linearize(votes))

    def export(self, dag, tip: NodeRef, destination: Union[str, Path, IO[str]]) -> str:
        """
        Write the script for tip to a path or an open text stream.

        Returns:
            The rendered script
        """
        text = self.render(dag, tip)

        if isinstance(destination, (str, Path)):
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            logger.info(f"Sage script written to {path}")
        else:
            destination.write(text)

        return text
