"""
Configuration records for the target locator.

All numeric profiles, camera constants and target dimensions are held in
frozen dataclasses that are built once (by hand or from a JSON file) and
passed explicitly into the filter, selector and solvers.

Classes:
    MetricSpec: Filter bounds plus scoring ideal/weight for one metric
    HoleCheck: Settings for the "hole in the middle" mask test
    TargetProfile: Named candidate profile
    CameraConfig: Image size, field of view and mounting of the camera
    TargetGeometry: Real world size of the target
    LocatorConfig: Everything above bundled for the TargetLocator

JSON layout (see config.example.json):
    {
        "profile": {"name": "...", "height": {"min": 25, "max": 120,
                    "ideal": 80, "weight": 1}, ...},
        "camera": {"image_width_px": 800, "image_height_px": 600,
                   "fov_vertical_deg": 51, "location": [9, -12, 0]},
        "target": {"width": 20, "height": 14},
        "vertical_edge_tolerance": 0.05
    }
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import TargetConfigError
from .fov_calculator import _is_number
from .line_segment_target import Point3


@dataclass(frozen=True)
class MetricSpec:
    """
    Bounds and scoring terms for a single polygon metric.

    A polygon passes the filter when ``min < value < max``. The
    selector penalises ``weight * abs(value - ideal)``.
    """

    min: float
    max: float
    ideal: float = 0.0
    weight: float = 0.0

    def __post_init__(self) -> None:
        values = (self.min, self.max, self.ideal, self.weight)
        if not all(_is_number(v) for v in values):
            raise ValueError(
                "MetricSpec.__init__: min, max, ideal and weight must be "
                "numbers."
            )

        if self.min > self.max:
            raise ValueError(
                f"MetricSpec.__init__: min ({self.min}) must not be greater "
                f"than max ({self.max})."
            )

        if self.weight < 0:
            raise ValueError(
                "MetricSpec.__init__: weight must be a non-negative number."
            )

    def accepts(self, value: float) -> bool:
        return self.min < value < self.max

    def penalty(self, value: float) -> float:
        return self.weight * abs(value - self.ideal)


@dataclass(frozen=True)
class HoleCheck:
    """
    Settings for checking that a target has an unfilled middle.

    The polygon's bounding box is trimmed by ``top`` and ``bottom``
    (ratios of the height) and ``left`` and ``right`` (ratios of the
    width). The remaining window of the binary mask must be at most
    ``max_fill_percent`` filled.
    """

    top: float = 0.0
    bottom: float = 0.5
    left: float = 0.25
    right: float = 0.25
    max_fill_percent: float = 10.0

    def __post_init__(self) -> None:
        for name in ("top", "bottom", "left", "right"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(
                    f"HoleCheck.__init__: {name} must be in the range "
                    "[0.0, 1.0]."
                )

        if not 0.0 <= self.max_fill_percent <= 100.0:
            raise ValueError(
                "HoleCheck.__init__: max_fill_percent must be in the range "
                "[0, 100]."
            )


@dataclass(frozen=True)
class TargetProfile:
    """
    Named set of min/max/ideal/weight values used to accept and score
    polygons as plausible targets.
    """

    name: str
    height: MetricSpec
    width: MetricSpec
    vertex_count: MetricSpec
    aspect_ratio: MetricSpec
    area: MetricSpec

    # Optional frame limits on the bounding box (pixels).
    min_y: Optional[float] = None
    max_y: Optional[float] = None

    # cv.approxPolyDP epsilon used when turning contours into polygons.
    polygon_epsilon: float = 5.0

    hole_check: Optional[HoleCheck] = None

    def __post_init__(self) -> None:
        if self.polygon_epsilon < 0:
            raise ValueError(
                "TargetProfile.__init__: polygon_epsilon must be a "
                "non-negative number."
            )

    def metrics(self) -> Dict[str, MetricSpec]:
        """
        Map of polygon attribute name to its MetricSpec.
        """

        return {
            "height": self.height,
            "width": self.width,
            "vertex_count": self.vertex_count,
            "aspect_ratio": self.aspect_ratio,
            "bounding_area": self.area,
        }


@dataclass(frozen=True)
class CameraConfig:
    """
    Camera image size, field of view and mounting position.

    ``location`` is the camera position relative to the robot's center
    of rotation (x is left-/right+, y is front+/back-, z is up).
    """

    image_width_px: float
    image_height_px: float
    fov_vertical_deg: float
    fov_horizontal_deg: Optional[float] = None
    location: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    height_above_floor: float = 0.0

    def __post_init__(self) -> None:
        if self.image_width_px <= 0 or self.image_height_px <= 0:
            raise ValueError(
                "CameraConfig.__init__: image size must be positive."
            )

        for name in ("fov_vertical_deg", "fov_horizontal_deg"):
            value = getattr(self, name)
            if value is not None and not 0 < value < 180:
                raise ValueError(
                    f"CameraConfig.__init__: {name} must be in the range "
                    "(0, 180)."
                )

        if not isinstance(self.location, Point3):
            object.__setattr__(self, "location", Point3(*self.location))

    @property
    def horizontal_fov_deg(self) -> float:
        """
        Horizontal FOV, derived from the vertical one when not given.
        """

        if self.fov_horizontal_deg is not None:
            return self.fov_horizontal_deg

        focal_px = 0.5 * self.image_height_px / math.tan(
            math.radians(self.fov_vertical_deg) / 2
        )
        return 2 * math.degrees(
            math.atan(self.image_width_px / 2 / focal_px)
        )


@dataclass(frozen=True)
class TargetGeometry:
    """
    Real world dimensions of the target and the height of its center
    above the floor (same units as the camera location).
    """

    width: float
    height: float
    elevation: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                "TargetGeometry.__init__: width and height must be positive."
            )


@dataclass(frozen=True)
class LocatorConfig:
    """
    Complete configuration for a TargetLocator.
    """

    profile: TargetProfile
    camera: CameraConfig
    target: TargetGeometry

    # Ratio of the polygon width searched for the left and right edges.
    vertical_edge_tolerance: float = 0.05

    # Pixel column the robot aims along (image center when None).
    aim_x_px: Optional[float] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.vertical_edge_tolerance <= 1.0:
            raise ValueError(
                "LocatorConfig.__init__: vertical_edge_tolerance must be in "
                "the range [0.0, 1.0]."
            )

    # -------------------------------------------------------------------------
    # Loading------------------------------------------------------------------
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocatorConfig":
        """
        Build a configuration from a nested dictionary.

        Raises:
            TargetConfigError: If a key is missing or a value is invalid.
        """

        try:
            profile_data = dict(data["profile"])
            metrics = {
                name: _metric_from_dict(name, profile_data.pop(name))
                for name in (
                    "height",
                    "width",
                    "vertex_count",
                    "aspect_ratio",
                    "area",
                )
            }

            hole_data = profile_data.pop("hole_check", None)
            hole_check = HoleCheck(**hole_data) if hole_data else None

            profile = TargetProfile(
                hole_check=hole_check, **metrics, **profile_data
            )

            camera_data = dict(data["camera"])
            if "location" in camera_data:
                camera_data["location"] = Point3(*camera_data["location"])
            camera = CameraConfig(**camera_data)

            target = TargetGeometry(**data["target"])

            return cls(
                profile=profile,
                camera=camera,
                target=target,
                vertical_edge_tolerance=data.get(
                    "vertical_edge_tolerance", 0.05
                ),
                aim_x_px=data.get("aim_x_px"),
            )

        except KeyError as e:
            raise TargetConfigError(
                f"LocatorConfig.from_dict: Missing configuration key {e}."
            ) from e

        except (TypeError, ValueError) as e:
            raise TargetConfigError(
                f"LocatorConfig.from_dict: Invalid configuration: {e}"
            ) from e

    @classmethod
    def load(cls, path: str) -> "LocatorConfig":
        """
        Load a configuration from a JSON file.

        Raises:
            TargetConfigError: If the file cannot be read or parsed, or
                holds an invalid configuration.
        """

        try:
            with open(path, "r") as f:
                data = json.load(f)

        except (OSError, json.JSONDecodeError) as e:
            raise TargetConfigError(
                f"LocatorConfig.load: Could not read {path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise TargetConfigError(
                f"LocatorConfig.load: {path} must hold a JSON object."
            )

        return cls.from_dict(data)


def _metric_from_dict(name: str, data: Any) -> MetricSpec:
    if not isinstance(data, dict):
        raise TypeError(f"{name} must be an object with min and max.")

    return MetricSpec(**data)
