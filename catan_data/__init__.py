"""Board construction and visualization utilities for the hex settlement game engine."""

from .topology import (
    TopologyBuilder,
    TopologyError,
    build_board,
    build_standard_topology,
    load_layout,
    load_default_layout,
    get_board_stats,
)

from .generator import (
    BoardGenerator,
    generate_standard_board,
)

from .graph_vis import (
    BoardVisualizer,
    visualize_board,
    visualize_standard_board,
)

__all__ = [
    # Topology
    "TopologyBuilder",
    "TopologyError",
    "build_board",
    "build_standard_topology",
    "load_layout",
    "load_default_layout",
    "get_board_stats",
    # Generation
    "BoardGenerator",
    "generate_standard_board",
    # Visualization
    "BoardVisualizer",
    "visualize_board",
    "visualize_standard_board",
]
