"""Two-dimensional rigid body physics, collision handling and mesh generation."""

__version__ = "0.1.0"