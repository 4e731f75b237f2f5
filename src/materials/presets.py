# materials/presets.py
from typing import Dict
from core.color import ColorRGB

class PhongPresets:
    """
    Predefined Phong parameter sets, passed to a sphere as keyword arguments:
    Sphere(center, radius, colour, **PhongPresets.mirror()).
    """

    @staticmethod
    def default() -> Dict[str, float]:
        return {"kd": 0.8, "ks": 1.2, "alpha": 10, "reflectivity": 0.3}

    @staticmethod
    def matte() -> Dict[str, float]:
        return {"kd": 0.9, "ks": 0.1, "alpha": 2, "reflectivity": 0.0}

    @staticmethod
    def glossy() -> Dict[str, float]:
        return {"kd": 0.6, "ks": 1.5, "alpha": 40, "reflectivity": 0.15}

    @staticmethod
    def mirror() -> Dict[str, float]:
        return {"kd": 0.1, "ks": 1.8, "alpha": 200, "reflectivity": 0.9}

    @staticmethod
    def by_name(name: str) -> Dict[str, float]:
        """Look up a preset by name, e.g. "glossy"."""
        presets = {
            "default": PhongPresets.default,
            "matte": PhongPresets.matte,
            "glossy": PhongPresets.glossy,
            "mirror": PhongPresets.mirror,
        }
        try:
            return presets[name]()
        except KeyError:
            raise KeyError(f"unknown shading preset {name!r}; expected one of {sorted(presets)}") from None

class ColorPresets:
    """Common color presets for objects and lights."""
    # Warm colors
    RED = ColorRGB(0.9, 0.2, 0.2)
    ORANGE = ColorRGB(0.9, 0.6, 0.1)
    YELLOW = ColorRGB(0.9, 0.9, 0.1)

    # Cool colors
    BLUE = ColorRGB(0.2, 0.3, 0.9)
    GREEN = ColorRGB(0.2, 0.8, 0.2)
    PURPLE = ColorRGB(0.6, 0.2, 0.8)

    # Neutral colors
    WHITE = ColorRGB(0.9, 0.9, 0.9)
    GRAY = ColorRGB(0.5, 0.5, 0.5)
    BLACK = ColorRGB(0.1, 0.1, 0.1)

    # Light colors
    WARM_LIGHT = ColorRGB(1.0, 0.95, 0.9)
    COOL_LIGHT = ColorRGB(0.9, 0.95, 1.0)
    DAYLIGHT = ColorRGB(1.0, 1.0, 1.0)
