"""
Robot rotation estimate from a camera bearing.

When the camera is not mounted at the robot's center of rotation, the
angle the camera sees a target at is not the angle the robot has to
turn. Given a rough distance to the target, this module corrects the
camera angle for the camera's offset from the rotation center.

Usage:
    # Rotation center 9 inches right of and 12 inches behind the camera
    estimator = RotationEstimator(9.0, 12.0)
    turn_deg = estimator.compute_rotation(camera_angle_deg=10.0,
                                          distance_estimate=117.0)
"""

import math

from .errors import tested


class RotationEstimator:
    """
    Converts camera bearings into robot rotations.
    """

    @tested
    def __init__(self, robot_x_offset: float, robot_y_offset: float) -> None:
        """
        Args:
            robot_x_offset (float): How far to the right of the camera
                the robot's center of rotation is.
            robot_y_offset (float): How far behind the camera the robot's
                center of rotation is.
        """

        self.robot_x_offset = float(robot_x_offset)
        self.robot_y_offset = float(robot_y_offset)

    @tested
    def compute_rotation(
        self, camera_angle_deg: float, distance_estimate: float
    ) -> float:
        """
        Estimate how far the robot must rotate to face the target.

        Args:
            camera_angle_deg (float): Bearing of the target seen by the
                camera (right is positive).
            distance_estimate (float): Rough forward distance from the
                camera to the target. The middle of the expected range is
                usually good enough.

        Returns:
            float: Rotation in degrees (right is positive).
        """

        lateral = distance_estimate * math.tan(math.radians(camera_angle_deg))
        forward = distance_estimate + self.robot_y_offset
        lateral -= self.robot_x_offset

        if forward == 0:
            if lateral == 0:
                return 0.0
            return math.copysign(90.0, lateral)

        return math.degrees(math.atan(lateral / forward))

    def __repr__(self) -> str:
        return (
            f"RotationEstimator(robot_x_offset={self.robot_x_offset}, "
            f"robot_y_offset={self.robot_y_offset})"
        )
