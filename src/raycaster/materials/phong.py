"""Phong material and local shading model.

This module implements the local illumination model used by the caster. For
every point light the surface gathers a Lambert diffuse term and a Phong
specular term:

    diffuse  += I * max(0, dot(l, n))
    specular += I * max(0, dot(l, -reflect(l, n))) ^ specular_exponent

where l is the unit direction from the surface to the light and n is the
surface normal. The final color is

    diffuse_color * diffuse * albedo[0] + white * specular * albedo[1]

Lights are never occluded (no shadow rays) and the result is not clamped.
The albedo also carries reflect and refract weights, and the material
carries a refractive index; neither is used by the local model.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.materials.phong import add_phong_material
    >>> ivory = add_phong_material(
    ...     refractive_index=1.0,
    ...     albedo=(0.9, 0.5, 0.1, 0.0),
    ...     diffuse_color=(0.4, 0.4, 0.3),
    ...     specular_exponent=50.0,
    ... )
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.lights import get_light_intensity, get_light_position, num_lights
from raycaster.core.ray import dot, normalize, reflect

# Type aliases for vectors
vec3 = tm.vec3
vec4 = tm.vec4
vec2 = tm.vec2


@ti.dataclass
class PhongMaterial:
    """Phong material properties.

    Attributes:
        refractive_index: Index of refraction. Carried, not used for shading.
        albedo: Weights (diffuse, specular, reflect, refract). Only the first
            two contribute to the local model.
        diffuse_color: Base RGB color scaled by the diffuse term.
        specular_exponent: Phong shininess; larger is a tighter highlight.
    """

    refractive_index: ti.f32
    albedo: vec4
    diffuse_color: vec3
    specular_exponent: ti.f32


@ti.func
def light_intensities(point: vec3, normal: vec3, specular_exponent: ti.f32) -> vec2:
    """Accumulate diffuse and specular light intensity over all lights.

    Args:
        point: The point light directions are measured from. Normally the
            surface hit point.
        normal: Unit surface normal at the hit.
        specular_exponent: Phong shininess.

    Returns:
        A vec2 (diffuse, specular). Both are 0 when the scene has no lights.
    """
    diffuse = 0.0
    specular = 0.0
    for k in range(num_lights[None]):
        intensity = get_light_intensity(k)
        light_dir = normalize(get_light_position(k) - point)
        diffuse += intensity * tm.max(0.0, dot(light_dir, normal))
        highlight = tm.max(0.0, dot(light_dir, -reflect(light_dir, normal)))
        specular += intensity * tm.pow(highlight, specular_exponent)
    return vec2(diffuse, specular)


@ti.func
def shade_phong(point: vec3, normal: vec3, material: PhongMaterial) -> vec3:
    """Compute the color of a surface point lit by every point light.

    Args:
        point: The point light directions are measured from.
        normal: Unit surface normal.
        material: The surface material.

    Returns:
        The unclamped RGB color.
    """
    intensity = light_intensities(point, normal, material.specular_exponent)
    white = vec3(1.0, 1.0, 1.0)
    return (
        material.diffuse_color * intensity[0] * material.albedo[0]
        + white * intensity[1] * material.albedo[1]
    )


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of Phong materials in the scene
MAX_PHONG_MATERIALS = 256

# Storage for Phong material properties
phong_refractive_indices = ti.field(dtype=ti.f32, shape=MAX_PHONG_MATERIALS)
phong_albedos = ti.Vector.field(4, dtype=ti.f32, shape=MAX_PHONG_MATERIALS)
phong_diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PHONG_MATERIALS)
phong_specular_exponents = ti.field(dtype=ti.f32, shape=MAX_PHONG_MATERIALS)
num_phong_materials = ti.field(dtype=ti.i32, shape=())


def clear_phong_materials() -> None:
    """Clear all Phong materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_phong_materials[None] = 0


def add_phong_material(
    refractive_index: float,
    albedo: tuple[float, float, float, float],
    diffuse_color: tuple[float, float, float],
    specular_exponent: float,
) -> int:
    """Add a Phong material to the material registry.

    Args:
        refractive_index: Index of refraction.
        albedo: (diffuse, specular, reflect, refract) weights.
        diffuse_color: Base color as (R, G, B).
        specular_exponent: Phong shininess (>= 0).

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the specular exponent is negative.
    """
    if specular_exponent < 0.0:
        raise ValueError(f"Specular exponent must be non-negative, got {specular_exponent}")

    idx = num_phong_materials[None]
    if idx >= MAX_PHONG_MATERIALS:
        raise RuntimeError(f"Maximum number of Phong materials ({MAX_PHONG_MATERIALS}) exceeded")

    phong_refractive_indices[idx] = refractive_index
    phong_albedos[idx] = vec4(albedo[0], albedo[1], albedo[2], albedo[3])
    phong_diffuse_colors[idx] = vec3(diffuse_color[0], diffuse_color[1], diffuse_color[2])
    phong_specular_exponents[idx] = specular_exponent
    num_phong_materials[None] = idx + 1
    return idx


def get_phong_material_count() -> int:
    """Get the number of Phong materials in the registry."""
    return int(num_phong_materials[None])


@ti.func
def get_phong_material(material_idx: ti.i32) -> PhongMaterial:
    """Get a Phong material by registry index."""
    return PhongMaterial(
        refractive_index=phong_refractive_indices[material_idx],
        albedo=phong_albedos[material_idx],
        diffuse_color=phong_diffuse_colors[material_idx],
        specular_exponent=phong_specular_exponents[material_idx],
    )


@ti.func
def shade_phong_by_id(point: vec3, normal: vec3, material_idx: ti.i32) -> vec3:
    """Shade a surface point using a material from the registry."""
    return shade_phong(point, normal, get_phong_material(material_idx))
