"""Materials module for local shading.

Components:
    phong: Phong material (diffuse + specular weights) and the shading
        function that accumulates light from every point light

Shading is purely local: no shadow rays, no reflection or refraction
recursion. The reflect/refract albedo weights and the refractive index are
stored with each material but do not affect the result.

All shading computations are implemented as Taichi functions.
"""

from .phong import (
    PhongMaterial,
    add_phong_material,
    clear_phong_materials,
    get_phong_material,
    get_phong_material_count,
    light_intensities,
    shade_phong,
    shade_phong_by_id,
)

__all__ = [
    "PhongMaterial",
    "add_phong_material",
    "clear_phong_materials",
    "get_phong_material",
    "get_phong_material_count",
    "light_intensities",
    "shade_phong",
    "shade_phong_by_id",
]
