"""Scene description and scene manager.

This module provides the host-side scene model and the manager that uploads
it into the Taichi fields used by the render kernels.

The scene model is a set of immutable value types:
- Material: Phong parameters plus the unused reflect/refract data
- SphereInfo: center, radius and a Material attached by value
- PointLight: position and scalar intensity
- SceneConfig: ordered tuples of spheres and lights

Invariants (positive radius, non-negative light intensity, correctly sized
tuples) are checked when the value is constructed, so a SceneConfig that
exists is always renderable.

The SceneManager:
- Registers each distinct Material once and maps spheres to material ids
- Writes spheres and lights into the device-side storage
- Converts scenes to and from plain dictionaries

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.manager import (
    ...     IVORY, PointLight, SceneConfig, SceneManager, SphereInfo
    ... )
    >>> config = SceneConfig(
    ...     spheres=(SphereInfo(center=(0.0, 0.0, -5.0), radius=1.0, material=IVORY),),
    ...     lights=(PointLight(position=(-20.0, 20.0, 20.0), intensity=3.0),),
    ... )
    >>> scene = SceneManager()
    >>> scene.load(config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from raycaster.core.lights import MAX_LIGHTS, add_point_light, clear_lights, get_light_count
from raycaster.materials.phong import (
    MAX_PHONG_MATERIALS,
    add_phong_material,
    clear_phong_materials,
    get_phong_material_count,
)
from raycaster.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)

logger = logging.getLogger(__name__)


class SceneConfigError(ValueError):
    """Raised when a scene description violates a scene invariant."""


def _as_floats(value: Any, size: int, name: str) -> tuple[float, ...]:
    """Coerce a sequence to a tuple of `size` floats."""
    try:
        result = tuple(float(c) for c in value)
    except (TypeError, ValueError) as e:
        raise SceneConfigError(f"{name} must be a sequence of {size} numbers, got {value!r}") from e
    if len(result) != size:
        raise SceneConfigError(f"{name} must have {size} components, got {len(result)}")
    return result


def _check_keys(data: dict[str, Any], allowed: set[str], what: str) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise SceneConfigError(f"Unknown {what} keys: {sorted(unknown)}")


# =============================================================================
# Scene Value Types
# =============================================================================


@dataclass(frozen=True)
class Material:
    """A Phong material.

    Attributes:
        refractive_index: Index of refraction (carried, unused by shading).
        albedo: Weights (diffuse, specular, reflect, refract).
        diffuse_color: Base RGB color.
        specular_exponent: Phong shininess.
    """

    refractive_index: float = 1.0
    albedo: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
    diffuse_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    specular_exponent: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", _as_floats(self.albedo, 4, "albedo"))
        object.__setattr__(
            self, "diffuse_color", _as_floats(self.diffuse_color, 3, "diffuse_color")
        )
        if self.specular_exponent < 0.0:
            raise SceneConfigError(
                f"specular_exponent must be non-negative, got {self.specular_exponent}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "refractive_index": self.refractive_index,
            "albedo": list(self.albedo),
            "diffuse_color": list(self.diffuse_color),
            "specular_exponent": self.specular_exponent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Material:
        _check_keys(
            data,
            {"refractive_index", "albedo", "diffuse_color", "specular_exponent"},
            "material",
        )
        return cls(**data)


# Materials of the classic four-sphere scene
IVORY = Material(
    refractive_index=1.0,
    albedo=(0.9, 0.5, 0.1, 0.0),
    diffuse_color=(0.4, 0.4, 0.3),
    specular_exponent=50.0,
)
RED_RUBBER = Material(
    refractive_index=1.0,
    albedo=(1.4, 0.3, 0.0, 0.0),
    diffuse_color=(0.3, 0.1, 0.1),
    specular_exponent=10.0,
)


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene description.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (> 0).
        material: The sphere's material, attached by value.
    """

    center: tuple[float, float, float]
    radius: float
    material: Material = Material()

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_floats(self.center, 3, "center"))
        if not self.radius > 0.0:
            raise SceneConfigError(f"Sphere radius must be positive, got {self.radius}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": list(self.center),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SphereInfo:
        _check_keys(data, {"center", "radius", "material"}, "sphere")
        if "center" not in data or "radius" not in data:
            raise SceneConfigError("A sphere needs both 'center' and 'radius'")
        material = Material.from_dict(data.get("material", {}))
        return cls(center=data["center"], radius=data["radius"], material=material)


@dataclass(frozen=True)
class PointLight:
    """A point light in the scene description.

    Attributes:
        position: World-space position.
        intensity: Scalar intensity (>= 0).
    """

    position: tuple[float, float, float]
    intensity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_floats(self.position, 3, "position"))
        if self.intensity < 0.0:
            raise SceneConfigError(f"Light intensity must be non-negative, got {self.intensity}")

    def to_dict(self) -> dict[str, Any]:
        return {"position": list(self.position), "intensity": self.intensity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PointLight:
        _check_keys(data, {"position", "intensity"}, "light")
        if "position" not in data:
            raise SceneConfigError("A light needs a 'position'")
        return cls(**data)


@dataclass(frozen=True)
class SceneConfig:
    """An ordered, read-only collection of spheres and point lights.

    Attributes:
        spheres: The spheres, in scan order.
        lights: The point lights. May be empty.
    """

    spheres: tuple[SphereInfo, ...] = ()
    lights: tuple[PointLight, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))
        if len(self.spheres) > MAX_SPHERES:
            raise SceneConfigError(
                f"Scene has {len(self.spheres)} spheres, maximum is {MAX_SPHERES}"
            )
        if len(self.lights) > MAX_LIGHTS:
            raise SceneConfigError(
                f"Scene has {len(self.lights)} lights, maximum is {MAX_LIGHTS}"
            )
        num_materials = len({s.material for s in self.spheres})
        if num_materials > MAX_PHONG_MATERIALS:
            raise SceneConfigError(
                f"Scene has {num_materials} distinct materials, maximum is {MAX_PHONG_MATERIALS}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {
            "spheres": [s.to_dict() for s in self.spheres],
            "lights": [light.to_dict() for light in self.lights],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build a scene from a dictionary with 'spheres' and 'lights' lists.

        Raises:
            SceneConfigError: If any entry is malformed or violates an invariant.
        """
        _check_keys(data, {"spheres", "lights"}, "scene")
        return cls(
            spheres=tuple(SphereInfo.from_dict(s) for s in data.get("spheres", [])),
            lights=tuple(PointLight.from_dict(light) for light in data.get("lights", [])),
        )


# =============================================================================
# Scene Manager
# =============================================================================


class SceneManager:
    """Uploads a SceneConfig into the device-side scene storage.

    Only one scene is resident at a time: the Taichi fields are module-level,
    so loading a scene replaces whatever was loaded before.

    Attributes:
        config: The currently loaded scene, or None.
        material_ids: Registry index assigned to each distinct Material.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.config: SceneConfig | None = None
        self.material_ids: dict[Material, int] = {}
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_lights()
        clear_phong_materials()
        self.material_ids.clear()
        self.config = None

    def clear(self) -> None:
        """Clear the entire scene (spheres, lights and materials)."""
        self._clear_all()

    def _material_id(self, material: Material) -> int:
        """Register a material on first use and return its id."""
        if material not in self.material_ids:
            self.material_ids[material] = add_phong_material(
                refractive_index=material.refractive_index,
                albedo=material.albedo,
                diffuse_color=material.diffuse_color,
                specular_exponent=material.specular_exponent,
            )
        return self.material_ids[material]

    def load(self, config: SceneConfig) -> None:
        """Replace the resident scene with `config`.

        If the upload fails part way, the scene is left empty.

        Args:
            config: The scene to upload.
        """
        self._clear_all()

        try:
            for sphere in config.spheres:
                add_sphere(sphere.center, sphere.radius, self._material_id(sphere.material))
            for light in config.lights:
                add_point_light(light.position, light.intensity)
        except (ValueError, RuntimeError):
            self._clear_all()
            raise

        self.config = config
        logger.debug(
            "Loaded scene: %d spheres, %d materials, %d lights",
            self.get_sphere_count(),
            self.get_material_count(),
            self.get_light_count(),
        )

    def load_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary (see SceneConfig.from_dict)."""
        self.load(SceneConfig.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Export the loaded scene to a dictionary."""
        if self.config is None:
            return SceneConfig().to_dict()
        return self.config.to_dict()

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the resident scene."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the resident scene."""
        return get_light_count()

    def get_material_count(self) -> int:
        """Get the number of distinct materials in the resident scene."""
        return get_phong_material_count()
