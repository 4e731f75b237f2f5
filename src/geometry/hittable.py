# geometry/hittable.py
import math
from core.vector import Vector3
from core.color import ColorRGB
from core.ray import Ray

class RaycastHit:
    """
    Records details of a ray-object intersection.

    An empty hit (no object) carries an infinite distance, so comparing
    `hit.distance > d` treats "nothing in the way" as unoccluded.
    """
    __slots__ = ("object_hit", "distance", "location", "normal")

    def __init__(self, object_hit: "SceneObject" = None, distance: float = math.inf,
                 location: Vector3 = None, normal: Vector3 = None):
        self.object_hit = object_hit  # Borrowed, never owned
        self.distance = distance      # Ray parameter at intersection
        self.location = location      # World-space intersection point
        self.normal = normal          # Unit surface normal at location

    @property
    def is_hit(self) -> bool:
        return self.object_hit is not None

    def __repr__(self) -> str:
        if not self.is_hit:
            return "RaycastHit(<none>)"
        return f"RaycastHit({self.object_hit!r}, {self.distance}, {self.location!r}, {self.normal!r})"

class SceneObject:
    """
    Abstract surface that can be hit by a ray and shaded with the Phong model.
    """
    def __init__(self, colour: ColorRGB, phong_kd: float, phong_ks: float,
                 phong_alpha: float, reflectivity: float):
        if not 0.0 <= reflectivity <= 1.0:
            raise ValueError(f"reflectivity must lie in [0, 1], got {reflectivity}")
        self.colour = colour
        self.phong_kd = phong_kd
        self.phong_ks = phong_ks
        self.phong_alpha = phong_alpha
        self.reflectivity = reflectivity

    def intersection_with(self, ray: Ray) -> RaycastHit:
        raise NotImplementedError("intersection_with() must be implemented by subclasses.")

    def normal_at(self, position: Vector3) -> Vector3:
        raise NotImplementedError("normal_at() must be implemented by subclasses.")
