"""
Telemetry values sent to the robot.

The robot side expects three numbers per frame: the bearing to turn, the
floor distance to the base of the target and the line of sight distance
to the target. How the numbers are transported (network table, serial
link, log file) is up to the caller, which passes a ``put_number``
callable to TargetTelemetry.publish().

Classes:
    TargetTelemetry: The three published values
    TelemetryEstimator: Width based estimate for an elevated target

Usage:
    telemetry = TargetTelemetry.from_solution(solution)
    if telemetry is not None:
        telemetry.publish(table.putNumber)
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from .config import CameraConfig, TargetGeometry
from .errors import tested
from .fov_calculator import FovCalculator
from .polygon import Polygon
from .rectangular_target import RectangularSolution

PutNumber = Callable[[str, float], object]


@dataclass(frozen=True)
class TargetTelemetry:
    """
    Values published to the robot for one frame.
    """

    # -------------------------------------------------------------------------
    # Class constants----------------------------------------------------------
    # -------------------------------------------------------------------------

    BEARING_KEY = "Bearing"
    DISTANCE_TO_BASE_KEY = "DistanceToBase"
    DISTANCE_TO_TARGET_KEY = "DistanceToTarget"

    bearing_deg: float
    distance_to_base: float
    distance_to_target: float

    @classmethod
    @tested
    def from_solution(
        cls, solution: RectangularSolution
    ) -> Optional["TargetTelemetry"]:
        """
        Telemetry from a rectangular solution, all measured from the
        robot's rotation center: the robot's rotation, the floor distance
        to the target center and the line of sight distance to it.

        Returns:
            Optional[TargetTelemetry]: None if there is no solution.
        """

        if not solution.has_solution:
            return None

        mid = solution.mid_to_robot
        line_of_sight = math.sqrt(mid.x ** 2 + mid.y ** 2 + mid.z ** 2)

        return cls(
            bearing_deg=solution.robot_rotation_deg,
            distance_to_base=solution.robot_distance,
            distance_to_target=line_of_sight,
        )

    @tested
    def publish(self, put_number: PutNumber) -> None:
        """
        Send the values through a put_number(key, value) callable.
        """

        put_number(self.BEARING_KEY, self.bearing_deg)
        put_number(self.DISTANCE_TO_BASE_KEY, self.distance_to_base)
        put_number(self.DISTANCE_TO_TARGET_KEY, self.distance_to_target)


class TelemetryEstimator:
    """
    Estimates telemetry for a target mounted above the camera from the
    pixel width of its polygon alone.

    The range comes from the angle the target's width subtends in the
    horizontal FOV. The floor distance then follows from the difference
    between the target's elevation and the camera's height.

    Usage:
        estimator = TelemetryEstimator(config.camera, config.target)
        telemetry = estimator.estimate(best_polygon)
    """

    @tested
    def __init__(
        self,
        camera: CameraConfig,
        target: TargetGeometry,
        aim_x_px: Optional[float] = None,
        debug: bool = False,
    ) -> None:
        """
        Args:
            camera (CameraConfig): Image size and FOV of the camera.
            target (TargetGeometry): Width and elevation of the target.
            aim_x_px (Optional[float]): Pixel column the robot aims along.
                Defaults to the image center.
            debug (bool): Print the intermediate values.
        """

        self.camera = camera
        self.target = target
        self.debug = debug

        self._calc = FovCalculator(
            camera.horizontal_fov_deg, camera.image_width_px
        )
        self._center_x = camera.image_width_px / 2

        if aim_x_px is None:
            aim_x_px = self._center_x
        self.aim_x_px = float(aim_x_px)
        self._aim_angle_deg = self._calc.angle_from_pixel_offset(
            self.aim_x_px - self._center_x
        )

    @tested
    def estimate(self, polygon: Polygon) -> Optional[TargetTelemetry]:
        """
        Estimate the telemetry for a target polygon.

        Returns:
            Optional[TargetTelemetry]: None if the polygon has no width or
                the target is closer than its height above the camera.
        """

        if polygon.width <= 0:
            if self.debug:
                print("TelemetryEstimator.estimate: Polygon has no width")
            return None

        half_angle = math.atan(
            (polygon.width / 2) / self._calc.focal_length_px
        )
        distance_to_target = (self.target.width / 2) / math.tan(half_angle)

        rise = self.target.elevation - self.camera.height_above_floor
        ratio = rise / distance_to_target
        if not -1.0 <= ratio <= 1.0:
            if self.debug:
                print(
                    "TelemetryEstimator.estimate: WARNING: Target elevation "
                    f"{rise:.1f} exceeds range {distance_to_target:.1f}"
                )
            return None

        elevation = math.asin(ratio)
        distance_to_base = math.cos(elevation) * distance_to_target

        camera_angle = self._calc.angle_from_pixel_offset(
            polygon.center_x - self._center_x
        )
        bearing_deg = camera_angle - self._aim_angle_deg

        if self.debug:
            print(
                f"TelemetryEstimator.estimate: bearing {bearing_deg:.1f} deg, "
                f"base {distance_to_base:.1f}, target "
                f"{distance_to_target:.1f}, elevation "
                f"{math.degrees(elevation):.1f} deg"
            )

        return TargetTelemetry(
            bearing_deg=bearing_deg,
            distance_to_base=distance_to_base,
            distance_to_target=distance_to_target,
        )
