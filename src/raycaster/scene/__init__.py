"""Scene module for scene description, storage and ray-scene queries.

Components:
    manager: Immutable scene description (materials, spheres, lights) and
        the SceneManager that uploads it to device storage
    intersection: Sphere storage and the nearest-hit query
    default_scene: The classic four-sphere scene

Scene data is organized for efficient kernel access:
    - Structure-of-Arrays layout for sphere data
    - Per-sphere material registry index
    - Point lights in their own fields (see raycaster.core.lights)

Importing this package allocates Taichi fields; call ti.init() first.
"""

from .default_scene import IMAGE_HEIGHT, IMAGE_WIDTH, create_default_scene
from .intersection import (
    MAX_SPHERES,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .manager import (
    IVORY,
    RED_RUBBER,
    Material,
    PointLight,
    SceneConfig,
    SceneConfigError,
    SceneManager,
    SphereInfo,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
    # Manager module
    "SceneManager",
    "SceneConfig",
    "SceneConfigError",
    "Material",
    "SphereInfo",
    "PointLight",
    "IVORY",
    "RED_RUBBER",
    # Default scene module
    "create_default_scene",
    "IMAGE_WIDTH",
    "IMAGE_HEIGHT",
]
