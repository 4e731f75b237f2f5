# core/utils.py
import numpy as np
from core.vector import Vector3

def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point uniformly distributed inside the unit ball.
    """
    while True:
        x, y, z = rng.uniform(-1.0, 1.0, 3)
        if x * x + y * y + z * z < 1.0:
            return Vector3(x, y, z)

def random_in_sphere(rng: np.random.Generator, radius: float) -> Vector3:
    """
    Uniform point inside a ball of the given radius centred on the origin.
    A zero radius always yields the centre and consumes no randomness.
    """
    if radius == 0:
        return Vector3(0, 0, 0)
    return random_in_unit_sphere(rng) * radius

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)
