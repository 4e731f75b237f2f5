# renderer/tone_mapping.py
import numpy as np
from numba import njit

@njit
def sigmoid_channel(value, a, b, inv_gamma):
    """
    Sigmoidal compression of one linear channel followed by gamma encoding.
    Negative input is treated as black.
    """
    if value <= 0.0:
        return 0.0
    p = value ** b
    display = p / (p + (0.5 / a) ** b)
    return display ** inv_gamma

@njit
def _tone_map_kernel(linear_image, output_image, a, b, inv_gamma):
    h, w, c = linear_image.shape
    for y in range(h):
        for x in range(w):
            for k in range(c):
                mapped = sigmoid_channel(linear_image[y, x, k], a, b, inv_gamma)
                output_image[y, x, k] = min(255, max(0, int(mapped * 255)))

def sigmoid_tone_mapping(linear_image, a=2.0, b=1.3, gamma=2.2):
    """
    Apply the sigmoidal tone map to a (height, width, 3) linear radiance
    buffer and quantise to 8 bits per channel.
    """
    linear_image = np.ascontiguousarray(linear_image, dtype=np.float64)
    output = np.zeros(linear_image.shape, dtype=np.uint8)
    _tone_map_kernel(linear_image, output, float(a), float(b), 1.0 / gamma)
    return output
