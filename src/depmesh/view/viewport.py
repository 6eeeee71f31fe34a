"""
Viewport Controller.

A camera over the simulation's world space: screen = world * scale + offset.
Zooming and panning only ever change this transform; simulation coordinates
are never touched.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import ViewportConfig

# Pixels of wheel delta per doubling of scale, inverted (deltaY > 0 zooms out)
WHEEL_SENSITIVITY = 0.002


@dataclass(frozen=True)
class ViewportTransform:
    """Scale plus translation. Immutable; the controller swaps whole values."""
    scale: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale + self.tx, y * self.scale + self.ty

    def invert(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.tx) / self.scale, (sy - self.ty) / self.scale


IDENTITY = ViewportTransform()


class Viewport:
    """
    Pan/zoom state for one drawing surface.

    Scale is clamped silently to [min_scale, max_scale].
    """

    def __init__(self, width: float = 1200, height: float = 800,
                 config: Optional[ViewportConfig] = None):
        self.config = config or ViewportConfig()
        self.width = width
        self.height = height
        self.transform = IDENTITY

    @property
    def scale(self) -> float:
        return self.transform.scale

    def _clamp(self, scale: float) -> float:
        return min(self.config.max_scale, max(self.config.min_scale, scale))

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.transform.apply(x, y)

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return self.transform.invert(sx, sy)

    def zoom_by(self, focal: Tuple[float, float], factor: float) -> ViewportTransform:
        """Multiply scale by factor, keeping the focal screen point fixed."""
        fx, fy = focal
        wx, wy = self.screen_to_world(fx, fy)
        scale = self._clamp(self.transform.scale * factor)
        self.transform = ViewportTransform(scale, fx - wx * scale, fy - wy * scale)
        return self.transform

    def zoom_at(self, focal: Tuple[float, float], delta: float) -> ViewportTransform:
        """
        Zoom from a wheel gesture.

        Args:
            focal: Cursor position in screen pixels.
            delta: Wheel delta; positive zooms out, negative zooms in.
        """
        return self.zoom_by(focal, 2 ** (-delta * WHEEL_SENSITIVITY))

    def zoom_in(self) -> ViewportTransform:
        return self.zoom_by((self.width / 2, self.height / 2), self.config.zoom_step)

    def zoom_out(self) -> ViewportTransform:
        return self.zoom_by((self.width / 2, self.height / 2), 1 / self.config.zoom_step)

    def pan(self, dx: float, dy: float) -> ViewportTransform:
        t = self.transform
        self.transform = ViewportTransform(t.scale, t.tx + dx, t.ty + dy)
        return self.transform

    def reset(self) -> ViewportTransform:
        self.transform = IDENTITY
        return self.transform

    def fit(self, bounds: Tuple[float, float, float, float], padding: float = 40.0) -> ViewportTransform:
        """
        Frame a world-space box (x0, y0, x1, y1) inside the surface.
        """
        x0, y0, x1, y1 = bounds
        w = max(x1 - x0, 1e-6)
        h = max(y1 - y0, 1e-6)
        avail_w = max(self.width - 2 * padding, 1.0)
        avail_h = max(self.height - 2 * padding, 1.0)
        scale = self._clamp(min(avail_w / w, avail_h / h))
        cx = (x0 + x1) / 2
        cy = (y0 + y1) / 2
        self.transform = ViewportTransform(
            scale, self.width / 2 - cx * scale, self.height / 2 - cy * scale
        )
        return self.transform

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
