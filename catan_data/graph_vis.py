"""Board visualization using NetworkX and matplotlib.

Provides a 2D debug rendering of:
- Tiles (terrain colours, probability markers, robber)
- The corner/side graph (corners as nodes, sides as edges)
- Settlements, cities and roads coloured by player
"""

from __future__ import annotations

import math
from collections import defaultdict
from pathlib import Path
from typing import Optional, Any

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import networkx as nx

from catan_core.board import Board
from catan_core.constants import Terrain, PieceType
from catan_core.coordinates import CornerKey
from catan_core.markers import ProbabilityMarker


PLAYER_COLORS = [
    "#E63946",  # Red
    "#457B9D",  # Blue
    "#F4A261",  # Orange
    "#F1FAEE",  # White
    "#2A9D8F",  # Teal
    "#6D4C41",  # Brown
]

TERRAIN_COLORS = {
    Terrain.FOREST: "#2D6A4F",
    Terrain.HILLS: "#BC6C25",
    Terrain.MOUNTAINS: "#8D99AE",
    Terrain.FIELDS: "#E9C46A",
    Terrain.PASTURE: "#95D5B2",
    Terrain.DESERT: "#E5D3B3",
    Terrain.SEA: "#4EA8DE",
}

BUILDING_MARKERS = {
    PieceType.SETTLEMENT: "o",
    PieceType.CITY: "s",
}


def marker_label(marker: ProbabilityMarker) -> str:
    """Marker value over its pips, as printed on the physical token."""
    return f"{marker.value}\n{'.' * marker.dots}"


class BoardVisualizer:
    """Visualizes a board using NetworkX and matplotlib."""

    def __init__(
        self,
        board: Board,
        figsize: tuple[int, int] = (12, 12),
        hex_size: float = 1.0,
        node_size: int = 30,
        font_size: int = 10,
    ):
        """Initialize the visualizer.

        Args:
            board: The Board to visualize.
            figsize: Figure size as (width, height).
            hex_size: Tile radius used for pixel projection.
            node_size: Size of empty corner nodes.
            font_size: Font size for marker labels.
        """
        self.board = board
        self.figsize = figsize
        self.hex_size = hex_size
        self.node_size = node_size
        self.font_size = font_size
        self._graph: Optional[nx.Graph] = None

    def _build_networkx_graph(self) -> nx.Graph:
        """Convert the corner/side arena to a NetworkX graph."""
        G = nx.Graph()

        for key, corner in self.board.corners.items():
            building = corner.building
            G.add_node(
                key,
                pos=corner.to_pixel(self.hex_size),
                building=building.piece_type if building else None,
                owner=building.owner_id if building else None,
            )

        for key, side in self.board.sides.items():
            a, b = side.corner_keys
            G.add_edge(
                a,
                b,
                side_key=key,
                owner=side.road.owner_id if side.road else None,
            )

        return G

    def _draw_tiles(self, ax: plt.Axes) -> None:
        """Draw tile hexagons with markers and the robber."""
        for tile in self.board.tiles.values():
            x, y = tile.to_pixel(self.hex_size)
            hexagon = mpatches.RegularPolygon(
                (x, y),
                numVertices=6,
                radius=self.hex_size,
                orientation=math.pi / 6,
                facecolor=TERRAIN_COLORS[tile.terrain],
                edgecolor="#333333",
                linewidth=1,
                zorder=1,
            )
            ax.add_patch(hexagon)

            if tile.marker is not None:
                ax.annotate(
                    marker_label(tile.marker),
                    (x, y),
                    fontsize=self.font_size,
                    fontweight="bold",
                    ha="center",
                    va="center",
                    color="#C1121F" if tile.marker.is_high_probability() else "black",
                    bbox=dict(
                        boxstyle="circle,pad=0.3",
                        facecolor="#FFF8E7",
                        edgecolor="#333333",
                        linewidth=1,
                    ),
                    zorder=3,
                )

            if tile.has_robber:
                ax.scatter(
                    [x], [y - 0.45 * self.hex_size],
                    marker="^",
                    s=200,
                    c="#222222",
                    zorder=4,
                )

    def _draw_roads(
        self,
        ax: plt.Axes,
        G: nx.Graph,
        pos: dict[CornerKey, tuple[float, float]],
    ) -> None:
        """Draw sides, thick and coloured where a road stands."""
        empty_edges = []
        player_edges: dict[int, list[tuple[str, str]]] = defaultdict(list)

        for u, v, data in G.edges(data=True):
            if data["owner"] is None:
                empty_edges.append((u, v))
            else:
                player_edges[data["owner"]].append((u, v))

        if empty_edges:
            nx.draw_networkx_edges(
                G, pos,
                edgelist=empty_edges,
                edge_color="#555555",
                width=0.8,
                ax=ax,
            )

        for player_id, edges in player_edges.items():
            nx.draw_networkx_edges(
                G, pos,
                edgelist=edges,
                edge_color=PLAYER_COLORS[player_id % len(PLAYER_COLORS)],
                width=5,
                ax=ax,
            )

    def _draw_buildings(
        self,
        ax: plt.Axes,
        G: nx.Graph,
        pos: dict[CornerKey, tuple[float, float]],
    ) -> None:
        """Draw settlements and cities on corners."""
        for node_id, data in G.nodes(data=True):
            building = data["building"]
            if building is None:
                continue
            x, y = pos[node_id]
            ax.scatter(
                [x], [y],
                marker=BUILDING_MARKERS[building],
                s=180 if building == PieceType.CITY else 120,
                c=PLAYER_COLORS[data["owner"] % len(PLAYER_COLORS)],
                edgecolors="black",
                linewidths=1,
                zorder=6,
            )

    def visualize(
        self,
        title: str = "Board",
        show_graph: bool = True,
        show_legend: bool = True,
        save_path: Optional[str | Path] = None,
        show: bool = True,
    ) -> plt.Figure:
        """Visualize the board.

        Args:
            title: Title for the figure.
            show_graph: Whether to draw the corner/side graph.
            show_legend: Whether to show the legend.
            save_path: If provided, save the figure to this path.
            show: Whether to display the figure.

        Returns:
            The matplotlib Figure object.
        """
        G = self._build_networkx_graph()
        self._graph = G
        pos = nx.get_node_attributes(G, "pos")

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.set_title(title, fontsize=14, fontweight="bold")

        self._draw_tiles(ax)

        if show_graph:
            self._draw_roads(ax, G, pos)
            nx.draw_networkx_nodes(
                G, pos,
                node_color="#FFFFFF",
                edgecolors="#333333",
                linewidths=0.5,
                node_size=self.node_size,
                ax=ax,
            )

        self._draw_buildings(ax, G, pos)

        if show_legend:
            self._draw_legend(ax)

        ax.set_aspect("equal")
        ax.autoscale_view()
        ax.axis("off")
        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        if show:
            plt.show()

        return fig

    def _draw_legend(self, ax: plt.Axes) -> None:
        legend_elements = [
            mpatches.Patch(facecolor=color, edgecolor="black", label=terrain.value.title())
            for terrain, color in TERRAIN_COLORS.items()
        ]
        legend_elements.append(
            plt.Line2D([0], [0], marker="o", color="w", markerfacecolor="#CCCCCC",
                       markersize=10, markeredgecolor="black", label="Settlement")
        )
        legend_elements.append(
            plt.Line2D([0], [0], marker="s", color="w", markerfacecolor="#CCCCCC",
                       markersize=10, markeredgecolor="black", label="City")
        )
        legend_elements.append(
            plt.Line2D([0], [0], marker="^", color="w", markerfacecolor="#222222",
                       markersize=10, label="Robber")
        )
        for i, color in enumerate(PLAYER_COLORS):
            legend_elements.append(
                plt.Line2D([0], [0], color=color, linewidth=3, label=f"Player {i}")
            )

        ax.legend(
            handles=legend_elements,
            loc="upper left",
            bbox_to_anchor=(1.02, 1),
            fontsize=8,
        )


def visualize_board(
    board: Board,
    title: str = "Board",
    save_path: Optional[str | Path] = None,
    show: bool = True,
    **kwargs: Any,
) -> plt.Figure:
    """Convenience function to visualize a board.

    Args:
        board: The Board to visualize.
        title: Title for the figure.
        save_path: If provided, save the figure to this path.
        show: Whether to display the figure.
        **kwargs: Additional arguments passed to BoardVisualizer.visualize()

    Returns:
        The matplotlib Figure object.
    """
    visualizer = BoardVisualizer(board)
    return visualizer.visualize(title=title, save_path=save_path, show=show, **kwargs)


def visualize_standard_board(
    seed: Optional[int] = None,
    save_path: Optional[str | Path] = None,
    show: bool = True,
) -> plt.Figure:
    """Generate and visualize a standard board.

    Args:
        seed: Seed for the board generator.
        save_path: If provided, save the figure to this path.
        show: Whether to display the figure.

    Returns:
        The matplotlib Figure object.
    """
    import random

    from catan_data.generator import generate_standard_board

    board = generate_standard_board(rng=random.Random(seed))
    return visualize_board(
        board,
        title="Standard Board (Before Setup)",
        save_path=save_path,
        show=show,
    )


if __name__ == "__main__":
    visualize_standard_board(seed=0, save_path="standard_board_vis.png")
