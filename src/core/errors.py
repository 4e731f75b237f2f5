# core/errors.py

class RaytracerError(Exception):
    """Base class for errors raised by the ray tracer."""


class DegenerateGeometryError(RaytracerError, ValueError):
    """
    Raised when a geometric operation has no defined result, e.g. normalizing
    the zero vector or projecting a ray parallel to the focal plane.
    """


class SceneFormatError(RaytracerError, ValueError):
    """Raised when a scene description cannot be turned into a Scene."""
