"""Software ray tracer for scenes of spheres and lights.

This package renders a described 3-D scene onto a 2-D pixel surface using
Whitted-style ray tracing in Taichi kernels:
- Viewport projection from a fixed eye point at the world origin
- Ray-sphere intersection and nearest-hit selection
- Ambient, directional and point lights with diffuse and specular terms
- Hard shadows and bounded mirror reflection

Subpackages:
    core: Vector helpers, colors, render configuration, tracer and frame driver
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene data model, JSON loading, device storage and lighting
    surface: Pixel surface contract and its backends
    raster: Simple 2-D line drawing mode
    preview: Image export utilities
"""

__version__ = "0.1.0"
