# geometry/light.py
import math
from core.vector import Vector3
from core.color import ColorRGB
from core.errors import DegenerateGeometryError

class PointLight:
    """
    An isotropic point light whose irradiance falls off with the square of
    the distance.
    """
    def __init__(self, position: Vector3, colour: ColorRGB, intensity: float):
        if intensity < 0:
            raise ValueError(f"light intensity must be non-negative, got {intensity}")
        self.position = position
        self.colour = colour
        self.intensity = intensity

    def illumination_at(self, distance: float) -> ColorRGB:
        # Irradiance is unbounded at the light itself
        if distance == 0:
            raise DegenerateGeometryError(f"point at zero distance from {self!r}")
        return self.colour.scale(self.intensity / (4 * math.pi * distance * distance))

    def __repr__(self) -> str:
        return f"PointLight({self.position!r}, {self.colour!r}, {self.intensity})"
