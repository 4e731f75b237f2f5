# src/geometry/world.py
from typing import Iterable, List, Optional
from core.color import ColorRGB
from core.ray import Ray
from geometry.hittable import SceneObject, RaycastHit
from geometry.light import PointLight

class Scene:
    """
    The objects, point lights and ambient light a renderer draws. Intersection
    is a linear scan over every object; the closest positive hit wins.
    """
    def __init__(self, objects: Optional[Iterable[SceneObject]] = None,
                 point_lights: Optional[Iterable[PointLight]] = None,
                 ambient_lighting: ColorRGB = None):
        self.objects: List[SceneObject] = list(objects or [])
        self.point_lights: List[PointLight] = list(point_lights or [])
        self.ambient_lighting = ambient_lighting if ambient_lighting is not None else ColorRGB(0)

    def add_object(self, obj: SceneObject):
        self.objects.append(obj)

    def add_light(self, light: PointLight):
        self.point_lights.append(light)

    def find_closest_intersection(self, ray: Ray) -> RaycastHit:
        closest = RaycastHit()
        for obj in self.objects:
            hit = obj.intersection_with(ray)
            if hit.distance < closest.distance:
                closest = hit
        return closest

    def __repr__(self) -> str:
        return f"Scene({len(self.objects)} objects, {len(self.point_lights)} lights)"
