"""
Static visualization for Hashiwokakero boards.

Renders board snapshots only; the solver never calls into this module.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .. import config
from ..core.snapshot import BoardSnapshot, IslandView


class PuzzleVisualizer:
    """Visualize Hashiwokakero board snapshots"""

    def __init__(self, figsize: Tuple[int, int] = config.VIZ_FIGSIZE, dpi: int = config.VIZ_DPI):
        """
        Initialize visualizer.

        Args:
            figsize: Figure size in inches
            dpi: Dots per inch for saved images
        """
        self.figsize = figsize
        self.dpi = dpi

        # Visual parameters
        self.island_radius = 0.3
        self.bridge_width = 0.05
        self.double_bridge_gap = 0.1
        self.grid_color = '#E0E0E0'
        self.island_color = '#2E86AB'
        self.complete_color = '#3BB273'
        self.bridge_color = '#424874'
        self.number_color = 'white'
        self.background_color = '#F7F7F7'

    def visualize(self, snapshot: BoardSnapshot,
                  show_solution: bool = True,
                  show_grid: bool = True,
                  title: Optional[str] = None,
                  save_path: Optional[Path] = None,
                  show_plot: bool = False) -> plt.Figure:
        """
        Create visualization of a board.

        Args:
            snapshot: The board state to draw
            show_solution: Whether to show bridges
            show_grid: Whether to show grid lines
            title: Optional title for the plot
            save_path: Optional path to save the image
            show_plot: Whether to display the plot

        Returns:
            The matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)
        fig.patch.set_facecolor(self.background_color)
        ax.set_facecolor(self.background_color)

        self._setup_axis(ax, snapshot)

        if show_grid:
            self._draw_grid(ax, snapshot.width, snapshot.height)

        # Bridges first so they appear behind islands
        if show_solution:
            self._draw_bridges(ax, snapshot)

        self._draw_islands(ax, snapshot)

        if title:
            ax.set_title(title, fontsize=16, pad=20)

        if save_path:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight',
                        facecolor=self.background_color)

        if show_plot:
            plt.show()
        else:
            plt.close(fig)

        return fig

    def _setup_axis(self, ax, snapshot: BoardSnapshot):
        ax.set_xlim(-0.5, snapshot.width - 0.5)
        ax.set_ylim(-0.5, snapshot.height - 0.5)
        ax.set_aspect('equal')

        # Row 0 at the top, as in the board arrays
        ax.invert_yaxis()

        ax.set_xticks([])
        ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)

    def _draw_grid(self, ax, width: int, height: int):
        """Draw background grid"""
        for x in range(width):
            ax.axvline(x, color=self.grid_color, linewidth=0.5, alpha=0.5)
        for y in range(height):
            ax.axhline(y, color=self.grid_color, linewidth=0.5, alpha=0.5)

    def _draw_islands(self, ax, snapshot: BoardSnapshot):
        """Draw all islands, completed ones highlighted"""
        for island in snapshot.islands:
            color = self.complete_color if island.complete else self.island_color
            circle = plt.Circle((island.col, island.row), self.island_radius,
                                color=color, zorder=2)
            ax.add_patch(circle)

            ax.text(island.col, island.row, str(island.value),
                    ha='center', va='center', fontsize=14, fontweight='bold',
                    color=self.number_color, zorder=3)

    def _draw_bridges(self, ax, snapshot: BoardSnapshot):
        """Draw all bridges of the snapshot's layout"""
        for island_id, neighbor_id, count in snapshot.bridge_list():
            island1 = snapshot.islands[island_id]
            island2 = snapshot.islands[neighbor_id]
            offsets = [0.0] if count == 1 else [-self.double_bridge_gap / 2, self.double_bridge_gap / 2]
            for offset in offsets:
                self._draw_bridge_line(ax, island1, island2, offset, count)

    def _draw_bridge_line(self, ax, island1: IslandView, island2: IslandView,
                          offset: float, count: int):
        """Draw one bridge line, shifted sideways by ``offset``"""
        dx = island2.col - island1.col
        dy = island2.row - island1.row
        length = np.sqrt(dx**2 + dy**2)

        # Unit vector and its perpendicular
        ux, uy = dx / length, dy / length
        px, py = -uy, ux

        x1 = island1.col + ux * self.island_radius + px * offset
        y1 = island1.row + uy * self.island_radius + py * offset
        x2 = island2.col - ux * self.island_radius + px * offset
        y2 = island2.row - uy * self.island_radius + py * offset

        line = plt.Line2D([x1, x2], [y1, y2],
                          color=self.bridge_color,
                          linewidth=self.bridge_width * (40 if count == 1 else 30),
                          solid_capstyle='round',
                          zorder=0)
        ax.add_line(line)

    def create_comparison_plot(self, snapshots: List[BoardSnapshot],
                               titles: List[str],
                               save_path: Optional[Path] = None) -> plt.Figure:
        """Create side-by-side comparison of several layouts"""
        n_snapshots = len(snapshots)
        fig, axes = plt.subplots(1, n_snapshots, figsize=(5 * n_snapshots, 5))

        if n_snapshots == 1:
            axes = [axes]

        for ax, snapshot, title in zip(axes, snapshots, titles):
            self._setup_axis(ax, snapshot)
            self._draw_bridges(ax, snapshot)
            self._draw_islands(ax, snapshot)
            ax.set_title(title, fontsize=12)

        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig


def plot_fitness_history(history: Sequence[float],
                         save_path: Optional[Path] = None) -> plt.Figure:
    """Plot the best fitness of every generation"""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(range(len(history)), [value * 100 for value in history], color='#2E86AB')
    ax.set_xlabel('Generation')
    ax.set_ylabel('Best fitness (%)')
    ax.set_ylim(0, 105)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=config.VIZ_DPI, bbox_inches='tight')
    plt.close(fig)

    return fig
