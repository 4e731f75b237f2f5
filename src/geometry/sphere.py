# geometry/sphere.py
import math
from core.vector import Vector3
from core.color import ColorRGB
from core.ray import Ray
from geometry.hittable import SceneObject, RaycastHit

# Default Phong coefficients for spheres
SPHERE_KD = 0.8
SPHERE_KS = 1.2
SPHERE_ALPHA = 10
SPHERE_REFLECTIVITY = 0.3

class Sphere(SceneObject):
    """
    Represents a sphere defined by its center, radius and shading parameters.
    """
    def __init__(self, center: Vector3, radius: float, colour: ColorRGB,
                 kd: float = SPHERE_KD, ks: float = SPHERE_KS,
                 alpha: float = SPHERE_ALPHA, reflectivity: float = SPHERE_REFLECTIVITY):
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        super().__init__(colour, kd, ks, alpha, reflectivity)
        self.center = center
        self.radius = radius

    def intersection_with(self, ray: Ray) -> RaycastHit:
        """
        Nearest intersection in front of the ray origin. A ray starting inside
        the sphere reports the exit point.
        """
        O = ray.origin
        D = ray.direction
        oc = O - self.center

        a = D.dot(D)
        b = 2 * D.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius

        det = b * b - 4 * a * c
        if det < 0:
            return RaycastHit()

        sqrt_det = math.sqrt(det)
        dist_lo = (-b - sqrt_det) / 2.0
        dist_hi = (-b + sqrt_det) / 2.0

        # Both roots behind the origin
        if dist_lo <= 0 and dist_hi <= 0:
            return RaycastHit()

        # Origin inside the sphere: only the far root is ahead
        if dist_lo <= 0:
            return self._hit_at(ray, dist_hi)

        return self._hit_at(ray, dist_lo)

    def _hit_at(self, ray: Ray, t: float) -> RaycastHit:
        location = ray.at(t)
        return RaycastHit(self, t, location, self.normal_at(location))

    def normal_at(self, position: Vector3) -> Vector3:
        return (position - self.center).normalize()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(center={self.center!r}, radius={self.radius})"
