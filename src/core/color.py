# core/color.py
import math
from typing import Tuple, Union

class ColorRGB:
    """
    Linear RGB color. Channels are unclamped until tone mapping, so values
    above 1.0 are expected for bright highlights.
    """
    __slots__ = ("r", "g", "b")

    def __init__(self, r: float, g: float = None, b: float = None):
        # ColorRGB(0.5) is a grey.
        if g is None and b is None:
            g = b = r
        object.__setattr__(self, "r", float(r))
        object.__setattr__(self, "g", float(g))
        object.__setattr__(self, "b", float(b))

    def __setattr__(self, name, value):
        raise AttributeError("ColorRGB is immutable")

    def __reduce__(self):
        return (ColorRGB, (self.r, self.g, self.b))

    def __add__(self, other: Union["ColorRGB", float]) -> "ColorRGB":
        if isinstance(other, (int, float)):
            return ColorRGB(self.r + other, self.g + other, self.b + other)
        return ColorRGB(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Union["ColorRGB", float]) -> "ColorRGB":
        return self.scale(other)

    def __rmul__(self, other: float) -> "ColorRGB":
        return self.scale(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColorRGB):
            return NotImplemented
        return self.r == other.r and self.g == other.g and self.b == other.b

    def __hash__(self) -> int:
        return hash((self.r, self.g, self.b))

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def scale(self, other: Union["ColorRGB", float]) -> "ColorRGB":
        """Scale by a scalar, or channel by channel by another color."""
        if isinstance(other, (int, float)):
            return ColorRGB(self.r * other, self.g * other, self.b * other)
        return ColorRGB(self.r * other.r, self.g * other.g, self.b * other.b)

    def power(self, e: float) -> "ColorRGB":
        return ColorRGB(math.pow(self.r, e), math.pow(self.g, e), math.pow(self.b, e))

    def inv(self) -> "ColorRGB":
        return ColorRGB(1.0 / self.r, 1.0 / self.g, 1.0 / self.b)

    def clamp_min(self, lo: float = 0.0) -> "ColorRGB":
        return ColorRGB(max(self.r, lo), max(self.g, lo), max(self.b, lo))

    def to_rgb(self) -> Tuple[int, int, int]:
        """8-bit channels: clip to [0, 1], scale by 255 and truncate."""
        return tuple(int(min(max(c, 0.0), 1.0) * 255) for c in self)

    def __repr__(self) -> str:
        return f"ColorRGB({self.r}, {self.g}, {self.b})"
