# renderer/settings.py
import dataclasses
import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from core.color import ColorRGB

logger = logging.getLogger(__name__)

# Single-sample variant: shadow rays hit the light centre, camera rays leave the aperture centre
HARD_SHADOWS = {"shadow_ray_count": 1, "light_size": 0.0, "dof_ray_count": 1, "dof_amount": 0.0}

def _require_int(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")

def _require_number(name: str, value: Any, positive: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if positive and value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    if not positive and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

@dataclass(frozen=True)
class RenderSettings:
    """
    Shading constants for a render. Defaults reproduce the soft-shadow,
    depth-of-field renderer; `hard_shadows()` gives the single-sample variant.
    """
    epsilon: float = 1e-4                 # Bias for reflected and shadow rays
    background_color: ColorRGB = field(default_factory=lambda: ColorRGB(0.001))
    shadow_ray_count: int = 20            # Shadow rays per light for soft shadows
    light_size: float = 0.4               # Radius of each light for shadow sampling
    dof_ray_count: int = 150              # Rays per pixel through the aperture
    dof_focal_plane: float = 3.51805      # z of the plane in focus
    dof_amount: float = 0.07              # Half-width of the square aperture
    tonemap_a: float = 2.0                # Brightness
    tonemap_b: float = 1.3                # Contrast
    gamma: float = 2.2
    progress_interval: int = 10           # Rows between progress log lines
    workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("shadow_ray_count", "dof_ray_count", "progress_interval", "workers"):
            _require_int(name, getattr(self, name), minimum=1)
        if self.seed is not None:
            _require_int("seed", self.seed, minimum=0)
        for name in ("epsilon", "light_size", "dof_amount"):
            _require_number(name, getattr(self, name), positive=False)
        for name in ("dof_focal_plane", "tonemap_a", "tonemap_b", "gamma"):
            _require_number(name, getattr(self, name), positive=True)
        if not isinstance(self.background_color, ColorRGB):
            raise ValueError(f"background_color must be a ColorRGB, got {self.background_color!r}")

    @classmethod
    def hard_shadows(cls, **overrides) -> "RenderSettings":
        """
        One shadow ray aimed at the light centre and one camera ray through
        the aperture centre: hard shadows, everything in focus.
        """
        values = dict(HARD_SHADOWS)
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "RenderSettings":
        """
        Build settings from plain data, e.g. the "render" block of a scene
        file. Unknown keys are ignored with a warning.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in values.items():
            if key not in known:
                logger.warning("Ignoring unknown render setting %r", key)
                continue
            if key == "background_color" and not isinstance(value, ColorRGB):
                try:
                    value = ColorRGB(*value) if isinstance(value, (list, tuple)) else ColorRGB(value)
                except (TypeError, ValueError):
                    raise ValueError(f"background_color must be a number or 3 numbers, got {value!r}") from None
            kwargs[key] = value
        return cls(**kwargs)

    def replace(self, **changes) -> "RenderSettings":
        return dataclasses.replace(self, **changes)
