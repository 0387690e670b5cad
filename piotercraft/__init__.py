"""Voxel world simulation: chunked terrain, trees, torch lighting, camera, raycasting and chunk streaming."""

__version__ = "0.1.0"