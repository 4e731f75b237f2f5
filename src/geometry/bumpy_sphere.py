# geometry/bumpy_sphere.py
import logging
import math
from typing import Optional
import numpy as np
from core.vector import Vector3
from core.color import ColorRGB
from geometry.sphere import Sphere
from materials.texture_loader import load_height_field

logger = logging.getLogger(__name__)

BUMP_FACTOR = 5.0

def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

class BumpySphere(Sphere):
    """
    A sphere whose shading normal is perturbed by a height field.

    The geometry (and therefore intersection) is that of the plain sphere; only
    `normal_at` changes. Without a height field the object shades exactly like
    a `Sphere`.
    """
    def __init__(self, center: Vector3, radius: float, colour: ColorRGB,
                 heights: Optional[np.ndarray] = None, bump_factor: float = BUMP_FACTOR,
                 **shading):
        super().__init__(center, radius, colour, **shading)
        self.bump_factor = bump_factor
        if heights is None:
            self.bump_map = None
            self.bump_map_height = 0
            self.bump_map_width = 0
        else:
            bump_map = np.array(heights, dtype=np.float64) * bump_factor
            if bump_map.ndim != 2:
                raise ValueError(f"height field must be 2D, got shape {bump_map.shape}")
            bump_map.setflags(write=False)
            self.bump_map = bump_map
            self.bump_map_height, self.bump_map_width = bump_map.shape

    @classmethod
    def from_image(cls, center: Vector3, radius: float, colour: ColorRGB,
                   image_path: str, bump_factor: float = BUMP_FACTOR, **shading) -> "BumpySphere":
        """
        Build a bumpy sphere from a grayscale height map on disk. A map that
        cannot be read is logged and the sphere falls back to smooth normals.
        """
        try:
            heights = load_height_field(image_path)
        except (OSError, ValueError) as e:
            logger.error("Error creating bump map from %s: %s", image_path, e)
            heights = None
        else:
            logger.debug("Loaded %dx%d bump map from %s", heights.shape[1], heights.shape[0], image_path)
        return cls(center, radius, colour, heights, bump_factor, **shading)

    def __setstate__(self, state):
        self.__dict__.update(state)
        # Unpickled arrays come back writable
        if self.bump_map is not None:
            self.bump_map.setflags(write=False)

    @property
    def has_bump_map(self) -> bool:
        return self.bump_map is not None

    def normal_at(self, position: Vector3) -> Vector3:
        sphere_normal = super().normal_at(position)
        if self.bump_map is None:
            return sphere_normal

        # Polar (u) and azimuthal (v) angles of the normal
        u = math.acos(min(abs(sphere_normal.y), 1.0))
        sin_u = math.sin(u)
        if sin_u == 0:
            v = 0.0  # Pole: azimuth undefined
        else:
            v = math.acos(max(-1.0, min(1.0, sphere_normal.x / sin_u)))

        if sphere_normal.y < 0:
            u = -u
        if sphere_normal.z < 0:
            v = -v

        sin_u = math.sin(u)
        cos_u = math.cos(u)
        sin_v = math.sin(v)
        cos_v = math.cos(v)

        # Tangent vectors at (u, v)
        P_u = Vector3(sin_u * cos_v, sin_u * sin_v, cos_u)
        P_v = Vector3(-sin_u * sin_v, sin_u * cos_v, 0)

        h = self.bump_map_height
        w = self.bump_map_width
        row = _round_half_up(h // 2 - u * h / math.pi)
        col = _round_half_up(w // 2 + v * w / (2 * math.pi))

        if not (0 <= row < h - 1 and 0 <= col < w - 1):
            return sphere_normal

        B_u = self.bump_map[row, col] - self.bump_map[row + 1, col]
        B_v = self.bump_map[row, col] - self.bump_map[row, col + 1]
        return (sphere_normal
                + sphere_normal.cross(P_v) * float(B_v)
                + sphere_normal.cross(P_u) * float(B_u)).normalize()
