"""
Jute Demo CLI

Builds the demo topologies and prints SageMath scripts (or writes GraphML
files) showing each tip's vote weights and relative ordering.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from jute.config import JuteConfig, setup_logging
from jute.constants import GRAPHML_SUFFIX
from jute.demo.topologies import TOPOLOGIES, build
from jute.export.graph import write_graphml
from jute.export.sage import SageExporter

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jute-demo",
        description="Render vote graphs and orderings of demo block DAGs",
    )
    parser.add_argument("--list", action="store_true", help="List available topologies and exit")
    parser.add_argument(
        "--topology", "-t", action="append", choices=sorted(TOPOLOGIES),
        help="Topology to render (repeatable, default: all)",
    )
    parser.add_argument(
        "--format", "-f", choices=("sage", "graphml"), default="sage",
        help="Output format (default: sage)",
    )
    parser.add_argument("--output-dir", "-o", type=str, help="Directory for plots / GraphML files")
    parser.add_argument("--config", "-c", type=str, help="Path to JSON config file")
    parser.add_argument("--log-level", type=str, help="Log level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    config = JuteConfig.load(args.config) if args.config else JuteConfig()
    if args.output_dir:
        config.export.output_dir = args.output_dir
    if args.log_level:
        config.log.level = args.log_level

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"config error: {error}", file=sys.stderr)
        return 2

    setup_logging(config.log)

    if args.list:
        for name in TOPOLOGIES:
            print(name)
        return 0

    exporter = SageExporter(config.export)
    for name in args.topology or list(TOPOLOGIES):
        scenario = build(name, config.graph)
        logger.debug(f"Built {name}: {scenario.dag.stats()}")

        if args.format == "graphml":
            path = Path(config.export.output_dir) / f"{name}{GRAPHML_SUFFIX}"
            write_graphml(scenario.dag, scenario.tip, path, config.export.separator)
            print(path)
        else:
            print(f"\n# {scenario.title}\n{exporter.render(scenario.dag, scenario.tip)}", end="")

    return 0


if __name__ == "__main__":
    sys.exit(main())
