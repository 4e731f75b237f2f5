# main.py
import argparse
import logging
import sys
import numpy as np
from core.vector import Vector3
from core.color import ColorRGB
from core.errors import RaytracerError
from geometry.world import Scene
from geometry.sphere import Sphere
from geometry.bumpy_sphere import BumpySphere
from geometry.light import PointLight
from geometry.scene_loader import load_scene
from materials.presets import ColorPresets, PhongPresets
from renderer.image_io import save_image
from renderer.raytracer import DEFAULT_BOUNCES, Renderer
from renderer.settings import HARD_SHADOWS, RenderSettings

logger = logging.getLogger("raytracer")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

def ripple_height_field(height: int = 256, width: int = 512, frequency: float = 24.0) -> np.ndarray:
    """Procedural height field of horizontal ripples, values in [0, 1]."""
    rows = np.linspace(0.0, np.pi, height)[:, None]
    cols = np.linspace(0.0, 2 * np.pi, width)[None, :]
    return 0.5 + 0.25 * np.sin(frequency * rows) + 0.25 * np.sin(frequency * cols / 2)

def create_world() -> Scene:
    scene = Scene(ambient_lighting=ColorRGB(0.02))

    # Large matte floor sphere
    scene.add_object(Sphere(Vector3(0, -1001, 5), 1000, ColorPresets.WHITE, **PhongPresets.matte()))

    scene.add_object(Sphere(Vector3(-0.9, -0.35, 4.2), 0.65, ColorPresets.RED))
    scene.add_object(BumpySphere(Vector3(0.75, -0.25, 5.2), 0.75, ColorPresets.BLUE,
                                 ripple_height_field(), bump_factor=2.0, **PhongPresets.glossy()))
    scene.add_object(Sphere(Vector3(0.1, 0.6, 7.0), 1.2, ColorPresets.GRAY, **PhongPresets.mirror()))

    scene.add_light(PointLight(Vector3(-2, 3, 2), ColorPresets.WARM_LIGHT, 120))
    scene.add_light(PointLight(Vector3(3, 2, 3), ColorPresets.COOL_LIGHT, 60))

    logger.debug("Created demo world: %r", scene)
    return scene

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phong-raytracer",
        description="Render a scene of spheres with soft shadows and depth of field.")
    parser.add_argument("scene", nargs="?", help="JSON scene file (default: built-in demo scene)")
    parser.add_argument("-o", "--output", default="output.png", help="output image path")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--height", type=int, help="image height in pixels")
    parser.add_argument("--bounces", type=int, help="maximum number of reflections")
    parser.add_argument("--seed", type=int, help="random seed for shadow and aperture sampling")
    parser.add_argument("--workers", type=int, help="rows rendered in parallel")
    parser.add_argument("--hard-shadows", action="store_true",
                        help="one shadow ray per light and no depth of field")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.scene:
            scene, options = load_scene(args.scene)
        else:
            scene, options = create_world(), {}

        # Command line flags override the scene file's render block
        width = options.pop("width", 320)
        height = options.pop("height", 240)
        bounces = options.pop("bounces", DEFAULT_BOUNCES)
        if args.width is not None:
            width = args.width
        if args.height is not None:
            height = args.height
        if args.bounces is not None:
            bounces = args.bounces

        settings = RenderSettings.from_dict(options)
        if args.hard_shadows:
            settings = settings.replace(**HARD_SHADOWS)
        if args.seed is not None:
            settings = settings.replace(seed=args.seed)
        if args.workers is not None:
            settings = settings.replace(workers=args.workers)

        renderer = Renderer(width, height, bounces, settings)
        image = renderer.render(scene)
        save_image(image, args.output)
    except (OSError, RaytracerError, ValueError) as e:
        logger.error("Rendering failed: %s", e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
