"""Point light storage for the shading model.

Point lights are stored in Taichi fields so the shading functions can loop
over them inside rendering kernels. A light is a position plus a scalar
intensity; lights have no color and no falloff with distance.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.lights import add_point_light, clear_lights
    >>> clear_lights()
    >>> add_point_light((-20.0, 20.0, 20.0), 3.0)
    0
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of point lights in the scene
MAX_LIGHTS = 64

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all point lights.

    Resets the light count to zero. An empty light list is valid and renders
    every surface black.
    """
    num_lights[None] = 0


def add_point_light(position: tuple[float, float, float], intensity: float) -> int:
    """Add a point light.

    Args:
        position: World-space light position as (x, y, z).
        intensity: Scalar intensity (>= 0).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the intensity is negative.
    """
    if intensity < 0.0:
        raise ValueError(f"Light intensity must be non-negative, got {intensity}")

    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    light_positions[idx] = vec3(position[0], position[1], position[2])
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of point lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_light_position(light_idx: ti.i32) -> vec3:
    """Get the position of a light by index."""
    return light_positions[light_idx]


@ti.func
def get_light_intensity(light_idx: ti.i32) -> ti.f32:
    """Get the intensity of a light by index."""
    return light_intensities[light_idx]
