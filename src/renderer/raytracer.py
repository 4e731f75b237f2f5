# renderer/raytracer.py
import logging
import math
import numbers
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional
import numpy as np
from core.color import ColorRGB
from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.utils import random_in_sphere, reflect
from core.vector import Vector3
from camera.camera import Camera
from geometry.hittable import SceneObject
from geometry.world import Scene
from .settings import RenderSettings
from .tone_mapping import sigmoid_tone_mapping

logger = logging.getLogger(__name__)

DEFAULT_BOUNCES = 2

class Renderer:
    """
    Recursive Whitted-style ray tracer with Phong shading, soft shadows from
    spherical lights, and depth of field from a square aperture.

    Rendering is a pure function of the scene, the settings and the seed:
    each image row draws from its own random stream, so the result does not
    depend on how many workers render it.
    """
    def __init__(self, width: int, height: int, bounces: int = DEFAULT_BOUNCES,
                 settings: Optional[RenderSettings] = None,
                 rng: Optional[np.random.Generator] = None):
        for name, value in (("width", width), ("height", height), ("bounces", bounces)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bounces < 0:
            raise ValueError(f"bounces must be non-negative, got {bounces}")
        self.width = width
        self.height = height
        self.bounces = bounces
        self.settings = settings if settings is not None else RenderSettings()
        # Stream used by direct trace()/illuminate() calls outside render()
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
        self.linear_buffer = None

    def trace(self, scene: Scene, ray: Ray, bounces_left: int,
              rng: Optional[np.random.Generator] = None) -> ColorRGB:
        """
        Colour seen along `ray`. `bounces_left` limits how many mirror
        reflections are followed.
        """
        rng = rng if rng is not None else self.rng

        closest_hit = scene.find_closest_intersection(ray)
        obj = closest_hit.object_hit
        if obj is None:
            return self.settings.background_color

        P = closest_hit.location
        N = closest_hit.normal
        O = ray.origin

        direct_illumination = self.illuminate(scene, obj, P, N, O, rng)

        reflectivity = obj.reflectivity
        if bounces_left == 0 or reflectivity == 0:
            return direct_illumination

        R = reflect(ray.direction, N)
        reflected_ray = Ray(P + R * self.settings.epsilon, R)
        reflected_illumination = self.trace(scene, reflected_ray, bounces_left - 1, rng)

        # Blend to conserve light
        return (direct_illumination.scale(1.0 - reflectivity)
                + reflected_illumination.scale(reflectivity))

    def illuminate(self, scene: Scene, obj: SceneObject, P: Vector3, N: Vector3, O: Vector3,
                   rng: Optional[np.random.Generator] = None) -> ColorRGB:
        """
        Phong illumination of `obj` at point P with normal N, viewed from O.
        """
        rng = rng if rng is not None else self.rng

        C_diff = obj.colour
        k_d = obj.phong_kd
        k_s = obj.phong_ks
        alpha = obj.phong_alpha

        # Ambient term
        colour = C_diff.scale(scene.ambient_lighting)

        V = (O - P).normalize()
        for light in scene.point_lights:
            to_light = light.position - P
            distance_to_light = to_light.length()
            C_spec = light.colour
            I = light.illumination_at(distance_to_light)

            L = to_light.normalize()
            R = L.reflect_in(N).normalize()

            shadow_scale = self.shadow_factor(scene, P, light.position, distance_to_light, rng)

            n_dot_l = N.dot(L)
            if n_dot_l > 0:
                colour = colour + I.scale(C_diff.scale(k_d * n_dot_l * shadow_scale))
            r_dot_v = R.dot(V)
            if r_dot_v > 0:
                colour = colour + I.scale(C_spec.scale(k_s * math.pow(r_dot_v, alpha) * shadow_scale))

        return colour

    def shadow_factor(self, scene: Scene, P: Vector3, light_position: Vector3,
                      distance_to_light: float,
                      rng: Optional[np.random.Generator] = None) -> float:
        """
        Fraction of shadow rays from P to random points inside the light that
        reach it unobstructed: 1.0 fully lit, 0.0 fully shadowed.
        """
        rng = rng if rng is not None else self.rng
        count = self.settings.shadow_ray_count
        unoccluded = 0
        for _ in range(count):
            target = light_position + random_in_sphere(rng, self.settings.light_size)
            direction = (target - P).normalize()
            shadow_ray = Ray(P + direction * self.settings.epsilon, direction)
            if scene.find_closest_intersection(shadow_ray).distance > distance_to_light:
                unoccluded += 1
        return unoccluded / count

    def tonemap(self, linear: ColorRGB) -> ColorRGB:
        """
        Sigmoidal tone mapping then display (gamma) encoding. Output channels
        lie in [0, 1) for non-negative input.
        """
        a = self.settings.tonemap_a
        b = self.settings.tonemap_b

        pow_rgb = linear.clamp_min(0.0).power(b)
        display_rgb = pow_rgb.scale((pow_rgb + math.pow(0.5 / a, b)).inv())
        return display_rgb.power(1.0 / self.settings.gamma)

    def focal_point(self, ray: Ray) -> Vector3:
        """Where the camera ray crosses the plane z = dof_focal_plane."""
        if ray.direction.z == 0:
            raise DegenerateGeometryError("camera ray is parallel to the focal plane")
        return ray.direction * (self.settings.dof_focal_plane / ray.direction.z)

    def sample_pixel(self, scene: Scene, ray: Ray, rng: np.random.Generator) -> ColorRGB:
        """
        Average of `dof_ray_count` rays from random points on the aperture,
        all converging on the primary ray's focal point.
        """
        focus = self.focal_point(ray)
        count = self.settings.dof_ray_count
        amount = self.settings.dof_amount

        linear = ColorRGB(0)
        for _ in range(count):
            if amount == 0:
                origin = Vector3(0, 0, 0)
            else:
                ox, oy = rng.uniform(-amount, amount, 2)
                origin = Vector3(ox, oy, 0)
            direction = (focus - origin).normalize()
            linear = linear + self.trace(scene, Ray(origin, direction), self.bounces, rng).scale(1.0 / count)
        return linear

    def _render_row(self, scene: Scene, camera: Camera, y: int, rng: np.random.Generator) -> np.ndarray:
        row = np.empty((self.width, 3), dtype=np.float64)
        for x in range(self.width):
            row[x] = tuple(self.sample_pixel(scene, camera.cast_ray(x, y), rng))
        return row

    def _log_progress(self, rows_done: int):
        if rows_done % self.settings.progress_interval == 0 or rows_done == self.height:
            logger.info("%.2f%% completed", 100.0 * rows_done / self.height)

    def render(self, scene: Scene) -> np.ndarray:
        """
        Render the scene into an (height, width, 3) uint8 RGB buffer. The
        linear radiance is kept in `self.linear_buffer`.

        With more than one worker, rows are rendered in separate processes;
        the scene and settings are sent to each process once.
        """
        camera = Camera(self.width, self.height)
        self.linear_buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        row_seeds = np.random.SeedSequence(self.settings.seed).spawn(self.height)

        logger.info("Rendering %dx%d, %d bounces, %d objects, %d lights, %d worker(s)",
                    self.width, self.height, self.bounces, len(scene.objects),
                    len(scene.point_lights), self.settings.workers)
        start = time.perf_counter()

        if self.settings.workers == 1:
            for y in range(self.height):
                self.linear_buffer[y] = self._render_row(scene, camera, y, np.random.default_rng(row_seeds[y]))
                self._log_progress(y + 1)
        else:
            rows_done = 0
            initargs = (type(self), self.width, self.height, self.bounces, self.settings, scene)
            with ProcessPoolExecutor(max_workers=self.settings.workers,
                                     initializer=_init_worker, initargs=initargs) as pool:
                futures = [pool.submit(_render_row_in_worker, y, row_seeds[y]) for y in range(self.height)]
                try:
                    for future in as_completed(futures):
                        y, row = future.result()
                        self.linear_buffer[y] = row
                        rows_done += 1
                        self._log_progress(rows_done)
                except BaseException:
                    # Rows not yet started are dropped
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise

        logger.info("Render finished in %.1fs", time.perf_counter() - start)
        return sigmoid_tone_mapping(self.linear_buffer, self.settings.tonemap_a,
                                    self.settings.tonemap_b, self.settings.gamma)

# Per-process state for parallel rendering, filled in by _init_worker
_worker = {}

def _init_worker(renderer_cls, width, height, bounces, settings, scene):
    _worker["renderer"] = renderer_cls(width, height, bounces, settings)
    _worker["camera"] = Camera(width, height)
    _worker["scene"] = scene

def _render_row_in_worker(y: int, seed: np.random.SeedSequence):
    renderer = _worker["renderer"]
    row = renderer._render_row(_worker["scene"], _worker["camera"], y, np.random.default_rng(seed))
    return y, row
