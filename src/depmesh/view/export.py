"""
Raster export of a Scene.

Renders the draw commands of a Scene into a PNG using matplotlib's headless
Agg canvas, so export works without a display (CI, CLI, servers). One data
unit is one screen pixel; the y axis is flipped to match screen space.
"""

import io
import logging
import math
from pathlib import Path
from typing import Optional, Union

from matplotlib import patheffects
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle, PathPatch, Polygon, Rectangle
from matplotlib.path import Path as MplPath

from . import style
from .scene import LinkDrawable, Scene

logger = logging.getLogger(__name__)

EXPORT_DPI = 100

# Paint order
Z_LINKS = 1
Z_NODES = 2
Z_LABELS = 3


def _points(pixels: float, dpi: int) -> float:
    """Convert a screen-pixel length to typographic points."""
    return pixels * 72.0 / dpi


def _arrow(link: LinkDrawable) -> Polygon:
    tx, ty = link.arrow_tip
    size = link.arrow_size
    back_x = tx - math.cos(link.arrow_angle) * size
    back_y = ty - math.sin(link.arrow_angle) * size
    # Perpendicular half-width of the arrowhead
    px = -math.sin(link.arrow_angle) * size / 2
    py = math.cos(link.arrow_angle) * size / 2
    return Polygon(
        [(tx, ty), (back_x + px, back_y + py), (back_x - px, back_y - py)],
        closed=True,
        facecolor=style.ARROW_COLOR,
        edgecolor="none",
        alpha=link.opacity,
        zorder=Z_LINKS,
    )


def render_figure(scene: Scene, dpi: int = EXPORT_DPI) -> Figure:
    """Draw a Scene onto a new matplotlib Figure."""
    width = max(scene.width, 1)
    height = max(scene.height, 1)
    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor=style.BACKGROUND)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()

    for link in scene.links:
        lw = _points(link.width, dpi)
        if link.curved:
            path = MplPath(
                link.points,
                [MplPath.MOVETO, MplPath.CURVE4, MplPath.CURVE4, MplPath.CURVE4],
            )
            ax.add_patch(PathPatch(
                path, fill=False, edgecolor=link.color, alpha=link.opacity,
                linewidth=lw, zorder=Z_LINKS,
            ))
        else:
            (x0, y0), (x1, y1) = link.points
            ax.plot([x0, x1], [y0, y1], color=link.color, alpha=link.opacity,
                    linewidth=lw, zorder=Z_LINKS)
        ax.add_patch(_arrow(link))

    for node in scene.nodes:
        if node.shape is style.Shape.SQUARE:
            patch = Rectangle(
                (node.x - node.size, node.y - node.size), node.size * 2, node.size * 2,
                facecolor=node.fill, edgecolor="none", alpha=node.opacity, zorder=Z_NODES,
            )
        else:
            patch = Circle(
                (node.x, node.y), node.size,
                facecolor=node.fill, edgecolor="none", alpha=node.opacity, zorder=Z_NODES,
            )
        ax.add_patch(patch)

    for label in scene.labels:
        ax.text(
            label.x, label.y, label.text,
            fontsize=_points(label.font_size, dpi),
            family="sans-serif",
            color=label.color,
            alpha=label.opacity,
            va="baseline",
            ha="left",
            zorder=Z_LABELS,
            path_effects=[patheffects.withStroke(
                linewidth=_points(label.halo_width, dpi), foreground=label.halo_color,
            )],
        )

    return fig


def export_png(scene: Scene, destination: Optional[Union[str, Path]] = None,
               dpi: int = EXPORT_DPI) -> bytes:
    """
    Serialize a Scene to PNG.

    Args:
        scene: The scene to draw.
        destination: Optional file path to also write the image to.
        dpi: Output resolution; the image is scene.width x scene.height pixels at 100.

    Returns:
        bytes: The encoded PNG.
    """
    fig = render_figure(scene, dpi=dpi)
    FigureCanvasAgg(fig)
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, facecolor=fig.get_facecolor())
    data = buffer.getvalue()

    if destination is not None:
        path = Path(destination)
        path.write_bytes(data)
        logger.info(f"Exported {len(scene.nodes)} nodes to {path}")

    return data
