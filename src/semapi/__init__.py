"""SEMAPI: named-resource lock service backed by Redis."""

__all__ = ["__version__"]

__version__ = "0.1.0"
