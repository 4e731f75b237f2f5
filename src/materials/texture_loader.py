# materials/texture_loader.py
import os
from PIL import Image
import numpy as np

def load_height_field(image_path: str) -> np.ndarray:
    """
    Load an image file as a height field with samples normalized to [0, 1].

    Grayscale images are used as-is; any other mode is converted to RGB and
    its blue channel (the low byte of a packed RGB value) is used.

    Args:
        image_path: Path to the image file

    Returns:
        float64 array of shape (height, width)

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image cannot be decoded
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Height map not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode == 'L':
                channel = np.asarray(img, dtype=np.float64)
            else:
                channel = np.asarray(img.convert('RGB'), dtype=np.float64)[:, :, 2]
    except OSError as e:
        raise ValueError(f"Error loading height map {image_path}: {e}") from e

    return channel / 255.0
