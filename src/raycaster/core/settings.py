"""Render settings for the ray caster.

Everything that describes a render apart from the scene itself lives here:
output dimensions, the background color for rays that miss every sphere,
the vertical field of view and the light reference switch used by the
shading model.

Example:
    >>> from raycaster.core.settings import RenderSettings
    >>> settings = RenderSettings(width=320, height=240)
    >>> settings.aspect_ratio
    1.3333333333333333
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Background color for rays that hit nothing
DEFAULT_BACKGROUND = (0.2, 0.7, 0.8)


@dataclass(frozen=True)
class RenderSettings:
    """Immutable per-render configuration.

    Attributes:
        width: Output width in pixels.
        height: Output height in pixels.
        background: RGB color returned for rays that miss every sphere.
        vfov: Vertical field of view in degrees. 90 degrees places the image
            plane at unit distance (z = -1) with a [-1, 1] vertical extent.
        legacy_light_point: If True, light directions are measured from the
            fixed point (1, 1, 1) instead of the surface hit point. This
            reproduces renders made with the old fixed-point lighting;
            leave it off for correct lighting.
    """

    width: int = 1024
    height: int = 768
    background: tuple[float, float, float] = DEFAULT_BACKGROUND
    vfov: float = 90.0
    legacy_light_point: bool = False

    def __post_init__(self) -> None:
        # Values from JSON or the command line may arrive as strings
        try:
            object.__setattr__(self, "width", int(self.width))
            object.__setattr__(self, "height", int(self.height))
            object.__setattr__(self, "vfov", float(self.vfov))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid render settings: {e}") from e
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        try:
            background = tuple(float(c) for c in self.background)
        except (TypeError, ValueError) as e:
            raise ValueError(f"background must be an RGB triple, got {self.background!r}") from e
        if len(background) != 3:
            raise ValueError(f"background must be an RGB triple, got {self.background!r}")
        # Normalize list input (e.g. from JSON) to a hashable tuple
        object.__setattr__(self, "background", background)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def to_dict(self) -> dict[str, Any]:
        """Export the settings to a dictionary (for JSON serialization)."""
        data = asdict(self)
        data["background"] = list(self.background)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderSettings:
        """Build settings from a dictionary, using defaults for missing keys.

        Raises:
            ValueError: If the dictionary has unknown keys or invalid values.
        """
        unknown = set(data) - {"width", "height", "background", "vfov", "legacy_light_point"}
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")
        return cls(**data)
