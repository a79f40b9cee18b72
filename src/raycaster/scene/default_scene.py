"""The classic four-sphere scene.

Two ivory and two red rubber spheres in front of the camera, lit by a single
point light above and to the left of the viewer:

    sphere  center            radius  material
    0       (-3,    0,  -16)  2       ivory
    1       (-1,   -1.5, -12) 2       red rubber
    2       ( 1.5, -0.5, -18) 3       red rubber
    3       ( 7,    5,  -18)  4       ivory

    light   (-20, 20, 20), intensity 3.0

The scene renders at 1024x768 against a (0.2, 0.7, 0.8) background.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> config, settings = create_default_scene()
    >>> len(config.spheres), settings.width, settings.height
    (4, 1024, 768)
"""

from raycaster.core.settings import RenderSettings
from raycaster.scene.manager import (
    IVORY,
    RED_RUBBER,
    PointLight,
    SceneConfig,
    SphereInfo,
)

IMAGE_WIDTH = 1024
IMAGE_HEIGHT = 768


def create_default_scene(
    width: int = IMAGE_WIDTH,
    height: int = IMAGE_HEIGHT,
    legacy_light_point: bool = False,
) -> tuple[SceneConfig, RenderSettings]:
    """Create the four-sphere scene and its render settings.

    Args:
        width: Output width in pixels.
        height: Output height in pixels.
        legacy_light_point: Measure light directions from the fixed legacy
            point (see RenderSettings.legacy_light_point).

    Returns:
        A tuple (config, settings). Load the config with SceneManager.load().
    """
    config = SceneConfig(
        spheres=(
            SphereInfo(center=(-3.0, 0.0, -16.0), radius=2.0, material=IVORY),
            SphereInfo(center=(-1.0, -1.5, -12.0), radius=2.0, material=RED_RUBBER),
            SphereInfo(center=(1.5, -0.5, -18.0), radius=3.0, material=RED_RUBBER),
            SphereInfo(center=(7.0, 5.0, -18.0), radius=4.0, material=IVORY),
        ),
        lights=(PointLight(position=(-20.0, 20.0, 20.0), intensity=3.0),),
    )
    settings = RenderSettings(
        width=width,
        height=height,
        legacy_light_point=legacy_light_point,
    )
    return config, settings
