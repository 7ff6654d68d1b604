"""
Single vertical edge triangulation.

Determines the real world (x, y, z) coordinates of both end points of a
vertical line segment of known length from its pixel end points, using
similar triangles and the camera's vertical field of view.

Requirements for a meaningful result:
    - The vertical FOV of the camera and the image height in pixels
    - The real world length of the vertical segment
    - Pixel coordinates with (0, 0) at the top left, y growing down
    - Consistent real world units (give inches, get inches back)

Real world coordinates are relative to the camera focal point: x points
out of the right side of the camera, y points forward out of the camera
and z points up.

Classes:
    Point3: Real world 3D point (NamedTuple)
    LineSegmentSolution: Result of a triangulation
    LineSegmentTarget: Holds camera settings and target size for repeated
        solves

Usage:
    calc = FovCalculator(fov_deg=44.1, pixels=480)
    result = solve_line_segment((242, 243), (242, 28), 20.125, calc, 640)
    if result.has_solution:
        print(result.distance, result.midpoint)
"""

import numbers
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional, Sequence

from .errors import tested
from .fov_calculator import FovCalculator

PixelPoint = Sequence[float]


class Point3(NamedTuple):
    """
    Real world 3D point (x = lateral, y = depth, z = vertical).
    """

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LineSegmentSolution:
    """
    Result of triangulating a single vertical segment.

    ``bottom_px`` is always the end point lower on screen (larger pixel
    y). The real world fields (bottom, top, distance, calculator) are
    only set when has_solution is True; check it before reading them.
    """

    has_solution: bool
    bottom_px: Optional[Sequence[float]]
    top_px: Optional[Sequence[float]]
    target_size_px: float
    image_width_px: float
    bottom: Optional[Point3] = None
    top: Optional[Point3] = None
    distance: Optional[float] = None
    calculator: Optional[FovCalculator] = None

    def __bool__(self) -> bool:
        return self.has_solution

    @property
    def midpoint(self) -> Optional[Point3]:
        """
        Real world mid point of the segment (None without a solution).
        """

        if not self.has_solution:
            return None

        return Point3(
            (self.bottom.x + self.top.x) / 2,
            (self.bottom.y + self.top.y) / 2,
            (self.bottom.z + self.top.z) / 2,
        )

    @property
    def bearing_deg(self) -> Optional[float]:
        """
        Degrees off the camera's center line of the segment's pixel mid
        point (right of center is positive).
        """

        if not self.has_solution:
            return None

        offset = (self.bottom_px[0] + self.top_px[0] - self.image_width_px) / 2
        return self.calculator.angle_from_pixel_offset(offset)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"solution": self.has_solution}
        if self.has_solution:
            data["bearing"] = round(self.bearing_deg, 1)
            data["distance"] = self.distance
            data["bottom"] = list(self.bottom)
            data["top"] = list(self.top)
            data["fov"] = str(self.calculator)
        return data


@tested
def solve_line_segment(
    pixel_a: PixelPoint,
    pixel_b: PixelPoint,
    target_size: float,
    calculator: FovCalculator,
    image_width_px: float,
) -> LineSegmentSolution:
    """
    Triangulate the real world end points of a vertical segment.

    The end points may be given in either order; the one with the larger
    pixel y is treated as the bottom. The real world height visible in
    the whole image at the target's depth is target_size scaled by the
    ratio of image height to segment height, and the distance follows
    from half of that height and tan(FOV / 2).

    Args:
        pixel_a (PixelPoint): (x, y) pixel coordinates of one end point.
        pixel_b (PixelPoint): (x, y) pixel coordinates of the other end.
        target_size (float): Real world length of the segment.
        calculator (FovCalculator): Calculator for the VERTICAL axis (its
            pixels must be the image height). Its distance is ignored.
        image_width_px (float): Width of the image in pixels.

    Returns:
        LineSegmentSolution: has_solution is False if the segment has no
            pixel height.
    """

    if pixel_a[1] > pixel_b[1]:
        bottom_px, top_px = tuple(pixel_a), tuple(pixel_b)
    else:
        bottom_px, top_px = tuple(pixel_b), tuple(pixel_a)

    target_size_px = bottom_px[1] - top_px[1]

    if target_size_px <= 0:
        return LineSegmentSolution(
            has_solution=False,
            bottom_px=bottom_px,
            top_px=top_px,
            target_size_px=target_size_px,
            image_width_px=image_width_px,
        )

    height_px = calculator.pixels
    half_height_px = height_px / 2
    half_width_px = image_width_px / 2

    visible_height = target_size / target_size_px * height_px
    distance = (visible_height / 2) / calculator.tan_half_fov

    solved_calc = calculator.with_distance(distance)

    bottom = Point3(
        solved_calc.length_from_pixel_offset(bottom_px[0] - half_width_px),
        distance,
        solved_calc.length_from_pixel_offset(half_height_px - bottom_px[1]),
    )
    top = Point3(
        solved_calc.length_from_pixel_offset(top_px[0] - half_width_px),
        distance,
        solved_calc.length_from_pixel_offset(half_height_px - top_px[1]),
    )

    return LineSegmentSolution(
        has_solution=True,
        bottom_px=bottom_px,
        top_px=top_px,
        target_size_px=target_size_px,
        image_width_px=image_width_px,
        bottom=bottom,
        top=top,
        distance=distance,
        calculator=solved_calc,
    )


class LineSegmentTarget:
    """
    Camera settings and target size for solving vertical segments.

    Usage:
        lst = LineSegmentTarget(44.1, 640, 480, 20.125)
        result = lst.solve((242, 243), (242, 28))
    """

    @tested
    def __init__(
        self,
        fov_deg: float,
        image_width_px: float,
        image_height_px: float,
        target_size: float,
    ) -> None:
        """
        Args:
            fov_deg (float): Full vertical FOV of the camera in degrees.
            image_width_px (float): Width of the image in pixels.
            image_height_px (float): Height of the image in pixels (the
                pixels the vertical FOV covers).
            target_size (float): Real world length of the vertical edge.

        Raises:
            ValueError: Invalid camera settings or target size.
        """

        if not (isinstance(target_size, numbers.Real) and target_size > 0):
            raise ValueError(
                "LineSegmentTarget.__init__: target_size must be a positive "
                "number."
            )

        if not (isinstance(image_width_px, numbers.Real) and image_width_px > 0):
            raise ValueError(
                "LineSegmentTarget.__init__: image_width_px must be a "
                "positive number."
            )

        self.calculator = FovCalculator(fov_deg, image_height_px)
        self.image_width_px = float(image_width_px)
        self.target_size = float(target_size)

    def solve(
        self, pixel_a: PixelPoint, pixel_b: PixelPoint
    ) -> LineSegmentSolution:
        return solve_line_segment(
            pixel_a,
            pixel_b,
            self.target_size,
            self.calculator,
            self.image_width_px,
        )

    def __str__(self) -> str:
        return (
            f"LineSegmentTarget(size={self.target_size}, "
            f"width_px={self.image_width_px}, fov={self.calculator})"
        )
