"""
Jute Constants

All tunable defaults defined here for single source of truth.
"""

from typing import Final, Tuple

# ==============================================================================
# GRAPH
# ==============================================================================

TIP_SELF_VOTE: Final[int] = 1                   # Tip endorses its own parent edges

# ==============================================================================
# EXPORT
# ==============================================================================

ORDER_SEPARATOR: Final[str] = "-"               # Joins identities in a title
DEFAULT_PLOT_DIR: Final[str] = "/home/user/plots"
DEFAULT_LAYOUT: Final[str] = "acyclic"
DEFAULT_EDGE_COLOR: Final[str] = "grey"
DEFAULT_FIGSIZE: Final[Tuple[int, int]] = (5, 16)
PLOT_SUFFIX: Final[str] = ".png"
GRAPHML_SUFFIX: Final[str] = ".graphml"

# ==============================================================================
# LOGGING
# ==============================================================================

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
