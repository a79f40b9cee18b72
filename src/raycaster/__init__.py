"""Taichi-based sphere ray caster.

This package renders a scene of spheres lit by point lights with the Phong
reflection model, one primary ray per pixel:
- Nearest-hit ray/sphere intersection
- Diffuse and specular shading, no shadows or reflections
- Scanline rendering streamed to plain-text PPM, or saved as PNG

Subpackages:
    core: Ray and vector utilities, settings, lights, integrator, renderer
    geometry: Sphere primitive and ray/sphere intersection
    materials: Phong material model
    scene: Scene description, device-side storage and the default scene
    camera: Pinhole camera with ray generation
    preview: PPM/PNG output and Matplotlib preview

Modules that allocate Taichi fields must be imported after ti.init().
"""

__version__ = "0.1.0"
