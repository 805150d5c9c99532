"""Multi-threaded Monte Carlo path tracer for scenes of spheres and planes.

The image is split into tiles that a pool of worker threads claims from a
shared queue and renders independently, with:
- Path tracing with a specular/diffuse material blend
- Per-tile deterministic random series (reproducible images)
- Spheres and infinite planes, tested by brute force
- BMP/PNG export of the packed BGRA pixel buffer

Subpackages:
    core: Vector math, random series, integrator, tile queue and engine
    geometry: Sphere and plane primitives with intersection routines
    materials: The fixed material table
    scene: Scene container, closest-hit query and the default scene
    camera: Fixed pinhole camera and primary ray generation
    output: Pixel buffer and image export
"""

__version__ = "0.1.0"
