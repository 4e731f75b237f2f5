# renderer/image_io.py
import logging
import os
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

def save_image(pixels: np.ndarray, path: str) -> None:
    """
    Write an (height, width, 3) uint8 buffer to disk. The format follows the
    file extension; use PNG for a lossless round trip.
    """
    if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"expected a (height, width, 3) uint8 array, got {pixels.dtype} {pixels.shape}")
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    Image.fromarray(pixels).save(path)
    logger.info("Saved %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)

def load_image(path: str) -> np.ndarray:
    """Read an image as an (height, width, 3) uint8 RGB buffer."""
    with Image.open(path) as img:
        return np.array(img.convert("RGB"), dtype=np.uint8)
