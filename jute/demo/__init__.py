"""
Jute Demo Harness

Named test topologies and the jute-demo console script.
"""

from jute.demo.topologies import (
    GENESIS,
    Scenario,
    ScenarioBuilder,
    TOPOLOGIES,
    build,
    build_all,
)

__all__ = [
    "GENESIS",
    "Scenario",
    "ScenarioBuilder",
    "TOPOLOGIES",
    "build",
    "build_all",
]
