# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray

class Camera:
    """
    Pinhole camera at the origin looking down +z, with +y up and +x right.
    Pixel (0, 0) is the top-left corner of the image.
    """
    def __init__(self, width: int, height: int, fov: float = math.radians(45)):
        self.width_px = width
        self.height_px = height
        self.fov = fov
        self.aspect_ratio = width / height

        # Viewport size on the plane z = 1
        self.width_m = 2.0 * math.tan(fov / 2)
        self.height_m = self.width_m / self.aspect_ratio
        self.x_step_m = self.width_m / width
        self.y_step_m = self.height_m / height

        self.position = Vector3(0, 0, 0)

    def cast_ray(self, x: int, y: int) -> Ray:
        """Ray through the centre of pixel (x, y)."""
        x_pos = (self.x_step_m - self.width_m) / 2 + x * self.x_step_m
        y_pos = (self.height_m - self.y_step_m) / 2 - y * self.y_step_m
        direction = Vector3(x_pos, y_pos, 1).normalize()
        return Ray(self.position, direction)
