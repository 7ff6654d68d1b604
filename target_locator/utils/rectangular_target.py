"""
Rectangular target solver.

Locates a rectangular target of known size (for example a strip of
retro-reflective tape around a goal) relative to the camera and to the
robot's center of rotation. The left and right vertical edges of the
target polygon are averaged into a vertical mid line, which is
triangulated with the single edge solver. The edges are also
triangulated on their own to estimate the angle of the wall the target
is mounted on.

Classes:
    RectangularSolution: Immutable result of solving one polygon
    RectangularTarget: Camera settings, target size and camera mounting

Usage:
    rt = RectangularTarget(20.0, 14.0, 800, 600, 51.0,
                           camera_location=Point3(9.0, -12.0, 0.0))
    solution = rt.compute_solution(polygon)
    if solution.has_solution:
        turn(solution.robot_rotation_deg)
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import LocatorConfig
from .errors import tested
from .line_segment_target import LineSegmentTarget, Point3
from .polygon import PointPx, Polygon, VerticalEdge


@dataclass(frozen=True)
class RectangularSolution:
    """
    Result of solving a polygon as a rectangular target.

    Attributes:
        has_solution (bool): False if the edges could not be found or the
            mid line has no height. Every other field is None then.
        left_edge (VerticalEdge): Pixel end points of the left edge.
        right_edge (VerticalEdge): Pixel end points of the right edge.
        mid_bottom_px (PointPx): Average of the edges' bottom points.
        mid_top_px (PointPx): Average of the edges' top points.
        mid_to_camera (Point3): Target center relative to the camera.
        mid_to_robot (Point3): Target center relative to the robot's
            center of rotation.
        camera_distance (float): Floor distance from the camera.
        camera_rotation_deg (float): Turn of the camera needed to center
            the target (right is positive).
        robot_distance (float): Floor distance from the robot center.
        robot_rotation_deg (float): Turn of the robot needed to face the
            target.
        wall_angle_deg (float): Estimated angle of the wall (diagnostic;
            noisy because it relies on the two short edges).
    """

    has_solution: bool
    left_edge: Optional[VerticalEdge] = None
    right_edge: Optional[VerticalEdge] = None
    mid_bottom_px: Optional[PointPx] = None
    mid_top_px: Optional[PointPx] = None
    mid_to_camera: Optional[Point3] = None
    mid_to_robot: Optional[Point3] = None
    camera_distance: Optional[float] = None
    camera_rotation_deg: Optional[float] = None
    robot_distance: Optional[float] = None
    robot_rotation_deg: Optional[float] = None
    wall_angle_deg: Optional[float] = None

    def __bool__(self) -> bool:
        return self.has_solution

    @property
    def center_px(self) -> Optional[PointPx]:
        """
        Pixel center of the mid line (None without a solution).
        """

        if not self.has_solution:
            return None

        return (
            (self.mid_bottom_px[0] + self.mid_top_px[0]) / 2,
            (self.mid_bottom_px[1] + self.mid_top_px[1]) / 2,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"hasSolution": self.has_solution}
        if self.has_solution:
            data["botCentDist"] = self.robot_distance
            data["botRot"] = self.robot_rotation_deg
            data["midPtFromBot"] = list(self.mid_to_robot)
            data["camCentDist"] = self.camera_distance
            data["camRot"] = self.camera_rotation_deg
            data["midPtFromCam"] = list(self.mid_to_camera)
            data["wallAngle"] = self.wall_angle_deg
        return data

    def __str__(self) -> str:
        parts = []
        for key, value in self.to_dict().items():
            if isinstance(value, bool):
                text = "true" if value else "false"
            elif isinstance(value, list):
                text = "[" + ", ".join(str(v) for v in value) + "]"
            else:
                text = str(value)
            parts.append(f'"{key}":{text}')
        return "{ " + ", ".join(parts) + " }"


NO_SOLUTION = RectangularSolution(has_solution=False)


class RectangularTarget:
    """
    Immutable solver settings for one rectangular target.

    The camera location is the position of the camera relative to the
    robot's center of rotation (x is right+, y is front+, z is up+). A
    camera mounted 9 inches right of and 12 inches behind the center is
    Point3(9, -12, 0).
    """

    # -------------------------------------------------------------------------
    # Class constants----------------------------------------------------------
    # -------------------------------------------------------------------------

    DEFAULT_TARGET_WIDTH = 22.0
    DEFAULT_TARGET_HEIGHT = 20.0
    DEFAULT_IMAGE_WIDTH_PX = 640
    DEFAULT_IMAGE_HEIGHT_PX = 480
    DEFAULT_FOV_DEG = 45.0
    DEFAULT_VERTICAL_EDGE_TOLERANCE = 0.05

    # -------------------------------------------------------------------------
    # Initialisation functions-------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def __init__(
        self,
        target_width: float = DEFAULT_TARGET_WIDTH,
        target_height: float = DEFAULT_TARGET_HEIGHT,
        image_width_px: float = DEFAULT_IMAGE_WIDTH_PX,
        image_height_px: float = DEFAULT_IMAGE_HEIGHT_PX,
        fov_deg: float = DEFAULT_FOV_DEG,
        camera_location: Point3 = Point3(0.0, 0.0, 0.0),
        vertical_edge_tolerance: float = DEFAULT_VERTICAL_EDGE_TOLERANCE,
    ) -> None:
        """
        Args:
            target_width (float): Real world width of the target.
            target_height (float): Real world height of the target (the
                length of its vertical edges).
            image_width_px (float): Width of the image in pixels.
            image_height_px (float): Height of the image in pixels.
            fov_deg (float): Full vertical FOV of the camera in degrees.
            camera_location (Point3): Camera position relative to the
                robot's center of rotation.
            vertical_edge_tolerance (float): Ratio of the polygon's width
                searched for each vertical edge (0.0 to 1.0).

        Raises:
            ValueError: Invalid camera settings, target size or tolerance.
        """

        if target_width <= 0:
            raise ValueError(
                "RectangularTarget.__init__: target_width must be a positive "
                "number."
            )

        if not 0.0 <= vertical_edge_tolerance <= 1.0:
            raise ValueError(
                "RectangularTarget.__init__: vertical_edge_tolerance must be "
                "in the range [0.0, 1.0]."
            )

        self._edge_solver = LineSegmentTarget(
            fov_deg, image_width_px, image_height_px, target_height
        )
        self._target_width = float(target_width)
        self._target_height = float(target_height)
        self._image_width_px = float(image_width_px)
        self._image_height_px = float(image_height_px)
        self._fov_deg = float(fov_deg)
        self._camera_location = Point3(*camera_location)
        self._vertical_edge_tolerance = float(vertical_edge_tolerance)

    @classmethod
    def from_config(cls, config: LocatorConfig) -> "RectangularTarget":
        """
        Build a solver from a LocatorConfig.
        """

        return cls(
            target_width=config.target.width,
            target_height=config.target.height,
            image_width_px=config.camera.image_width_px,
            image_height_px=config.camera.image_height_px,
            fov_deg=config.camera.fov_vertical_deg,
            camera_location=config.camera.location,
            vertical_edge_tolerance=config.vertical_edge_tolerance,
        )

    # -------------------------------------------------------------------------
    # Properties---------------------------------------------------------------
    # -------------------------------------------------------------------------

    @property
    def target_width(self) -> float:
        return self._target_width

    @property
    def target_height(self) -> float:
        return self._target_height

    @property
    def image_width_px(self) -> float:
        return self._image_width_px

    @property
    def image_height_px(self) -> float:
        return self._image_height_px

    @property
    def fov_deg(self) -> float:
        return self._fov_deg

    @property
    def camera_location(self) -> Point3:
        return self._camera_location

    @property
    def vertical_edge_tolerance(self) -> float:
        return self._vertical_edge_tolerance

    # -------------------------------------------------------------------------
    # Solving------------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def compute_solution(self, polygon: Polygon) -> RectangularSolution:
        """
        Solve a polygon as this rectangular target.

        Args:
            polygon (Polygon): Polygon of the target (usually the winner
                of a TargetSelector).

        Returns:
            RectangularSolution: NO_SOLUTION if either vertical edge is
                missing or the mid line has no pixel height.
        """

        tolerance = self._vertical_edge_tolerance
        left = polygon.find_left_edge(tolerance)
        right = polygon.find_right_edge(tolerance)

        if left is None or right is None:
            return NO_SOLUTION

        mid_bottom_px = _average(left.bottom, right.bottom)
        mid_top_px = _average(left.top, right.top)

        mid = self._edge_solver.solve(mid_bottom_px, mid_top_px)
        if not mid.has_solution:
            return NO_SOLUTION

        to_camera = mid.midpoint
        loc = self._camera_location
        to_robot = Point3(
            to_camera.x + loc.x, to_camera.y + loc.y, to_camera.z + loc.z
        )

        # Wall angle from the two edges' own triangulations (depth change
        # over lateral change). An edge without a solution gives no angle.
        wall_angle_deg = None
        left_solved = self._edge_solver.solve(left.bottom, left.top)
        right_solved = self._edge_solver.solve(right.bottom, right.top)
        if left_solved.has_solution and right_solved.has_solution:
            p0 = left_solved.midpoint
            p1 = right_solved.midpoint
            wall_angle_deg = atan_deg(p1.y - p0.y, p1.x - p0.x)

        return RectangularSolution(
            has_solution=True,
            left_edge=left,
            right_edge=right,
            mid_bottom_px=mid_bottom_px,
            mid_top_px=mid_top_px,
            mid_to_camera=to_camera,
            mid_to_robot=to_robot,
            camera_distance=math.hypot(to_camera.x, to_camera.y),
            camera_rotation_deg=atan_deg(to_camera.x, to_camera.y),
            robot_distance=math.hypot(to_robot.x, to_robot.y),
            robot_rotation_deg=atan_deg(to_robot.x, to_robot.y),
            wall_angle_deg=wall_angle_deg,
        )

    def __repr__(self) -> str:
        return (
            f"RectangularTarget(target_width={self._target_width}, "
            f"target_height={self._target_height}, "
            f"image_width_px={self._image_width_px}, "
            f"image_height_px={self._image_height_px}, "
            f"fov_deg={self._fov_deg}, "
            f"camera_location={tuple(self._camera_location)}, "
            f"vertical_edge_tolerance={self._vertical_edge_tolerance})"
        )


def atan_deg(numerator: float, denominator: float) -> float:
    """
    Degrees of atan(numerator / denominator).

    A zero denominator gives +90 or -90 by the sign of the numerator, and
    0 when both are zero.
    """

    if denominator == 0:
        if numerator == 0:
            return 0.0
        return math.copysign(90.0, numerator)

    return math.degrees(math.atan(numerator / denominator))


def _average(a: PointPx, b: PointPx) -> PointPx:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
