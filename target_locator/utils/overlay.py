"""
Drawing helpers for target locator results.

All drawing is done in place with OpenCV onto a BGR image owned by the
caller. Nothing is drawn for a result without a solution.

Classes:
    Overlay: Colours, line styles and drawing methods
"""

from typing import Iterable, Optional, Tuple

import cv2 as cv
import numpy as np

from .errors import tested
from .fov_calculator import FovCalculator
from .line_segment_target import Point3
from .polygon import Polygon
from .rectangular_target import RectangularSolution

Color = Tuple[int, int, int]


class Overlay:
    """
    Draws polygons, rectangular solutions and FOV grids onto images.

    Usage:
        overlay = Overlay()
        overlay.draw_polygons(frame, rejected, overlay.GRAY)
        overlay.draw_solution(frame, solution)
    """

    # -------------------------------------------------------------------------
    # Class constants----------------------------------------------------------
    # -------------------------------------------------------------------------

    # Colours (BGR)
    RED = (0, 0, 255)
    GREEN = (0, 255, 0)
    BLUE = (255, 0, 0)
    CYAN = (255, 255, 0)
    YELLOW = (0, 255, 255)
    MAGENTA = (255, 0, 255)
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GRAY = (100, 100, 100)

    VERTICAL_LINE_COLOR = (80, 255, 255)
    CROSS_HAIR_COLOR = (255, 255, 80)
    GRID_TEXT_COLOR = (180, 180, 0)

    # Text
    FONT = cv.FONT_HERSHEY_PLAIN
    TEXT_SIZE = 1.0
    TEXT_THICKNESS = 1
    TEXT_GAP = 2

    # Text rows of a solution
    ROBOT_ROW = 0
    CAMERA_ROW = 1
    WALL_ROW = 2

    DEFAULT_CROSS_HAIR_SIZE = 10
    DEFAULT_GRID_SPACING_DEG = 5.0

    def __init__(
        self,
        line_thickness: int = 1,
        cross_hair_size: int = DEFAULT_CROSS_HAIR_SIZE,
    ) -> None:
        if line_thickness <= 0 or cross_hair_size <= 0:
            raise ValueError(
                "Overlay.__init__: line_thickness and cross_hair_size must "
                "be positive."
            )

        self.line_thickness = line_thickness
        self.cross_hair_size = cross_hair_size

    # -------------------------------------------------------------------------
    # Polygons-----------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def draw_polygons(
        self,
        image: np.ndarray,
        polygons: Iterable[Polygon],
        color: Optional[Color] = None,
    ) -> None:
        if color is None:
            color = self.GREEN

        contours = [p.to_contour() for p in polygons if len(p) > 0]
        if contours:
            cv.polylines(image, contours, True, color, self.line_thickness)

    def draw_polygon_info(
        self, image: np.ndarray, polygon: Polygon, color: Optional[Color] = None
    ) -> None:
        """
        Draw the bounding box of a polygon with its size and vertex count
        written above it.
        """

        if len(polygon) == 0:
            return

        if color is None:
            color = self.YELLOW

        top_left = (int(polygon.min_x), int(polygon.min_y))
        bottom_right = (int(polygon.max_x), int(polygon.max_y))
        cv.rectangle(image, top_left, bottom_right, color, self.line_thickness)

        text = (
            f"{polygon.width:.0f}x{polygon.height:.0f} "
            f"n={polygon.vertex_count} ar={polygon.aspect_ratio:.2f}"
        )
        self._draw_text(
            image, text, (top_left[0], max(top_left[1] - self.TEXT_GAP, 10)),
            color,
        )

    # -------------------------------------------------------------------------
    # Solutions----------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def draw_solution(
        self, image: np.ndarray, solution: RectangularSolution
    ) -> None:
        """
        Draw a rectangular solution: the left, right and mid vertical
        lines, a cross hair at the target center, and BOT / CAM / WALL
        text rows. The rows are drawn at the bottom of the image when the
        target is in its upper half so they do not cover it.
        """

        if not solution.has_solution:
            return

        self.draw_vertical_lines(image, solution)
        self.draw_cross_hair(image, solution)

        self._draw_info_row(
            image, solution, self.ROBOT_ROW,
            _info_text(
                "BOT",
                solution.robot_rotation_deg,
                solution.robot_distance,
                solution.mid_to_robot,
            ),
        )
        self._draw_info_row(
            image, solution, self.CAMERA_ROW,
            _info_text(
                "CAM",
                solution.camera_rotation_deg,
                solution.camera_distance,
                solution.mid_to_camera,
            ),
        )

        if solution.wall_angle_deg is not None:
            self._draw_info_row(
                image, solution, self.WALL_ROW,
                f"WALL: {solution.wall_angle_deg:.1f} deg",
            )

    def draw_vertical_lines(
        self, image: np.ndarray, solution: RectangularSolution
    ) -> None:
        if not solution.has_solution:
            return

        lines = (
            (solution.left_edge.bottom, solution.left_edge.top),
            (solution.right_edge.bottom, solution.right_edge.top),
            (solution.mid_bottom_px, solution.mid_top_px),
        )
        for p0, p1 in lines:
            cv.line(
                image,
                _to_px(p0),
                _to_px(p1),
                self.VERTICAL_LINE_COLOR,
                self.line_thickness,
            )

    def draw_cross_hair(
        self, image: np.ndarray, solution: RectangularSolution
    ) -> None:
        if not solution.has_solution:
            return

        cx, cy = _to_px(solution.center_px)
        size = self.cross_hair_size
        cv.line(
            image, (cx - size, cy), (cx + size, cy),
            self.CROSS_HAIR_COLOR, self.line_thickness,
        )
        cv.line(
            image, (cx, cy - size), (cx, cy + size),
            self.CROSS_HAIR_COLOR, self.line_thickness,
        )

    def _draw_info_row(
        self,
        image: np.ndarray,
        solution: RectangularSolution,
        row: int,
        text: str,
    ) -> None:
        (_, text_h), baseline = cv.getTextSize(
            text, self.FONT, self.TEXT_SIZE, self.TEXT_THICKNESS
        )
        line_height = text_h + baseline + self.TEXT_GAP
        image_h = image.shape[0]

        top = line_height * row
        if solution.center_px[1] < image_h / 2:
            top = image_h - line_height - top

        self._draw_text(
            image, text, (0, top + text_h + self.TEXT_GAP // 2),
            self.WHITE, background=self.BLACK,
        )

    # -------------------------------------------------------------------------
    # FOV grid-----------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def draw_fov_grid(
        self,
        image: np.ndarray,
        calculator: FovCalculator,
        horizontal: bool = True,
        spacing_deg: float = DEFAULT_GRID_SPACING_DEG,
        line_color: Optional[Color] = None,
        text_color: Optional[Color] = GRID_TEXT_COLOR,
    ) -> bool:
        """
        Draw lines every spacing_deg degrees out from the image center.

        Args:
            image (np.ndarray): Image to draw on.
            calculator (FovCalculator): Calculator whose pixel span must
                match the image width (horizontal) or height (vertical).
            horizontal (bool): True for vertical lines across the width
                (horizontal FOV), False for horizontal lines down the
                height (vertical FOV).
            spacing_deg (float): Degrees between lines.
            line_color (Optional[Color]): Line colour, GRAY by default.
            text_color (Optional[Color]): Label colour, None for no
                labels.

        Returns:
            bool: False if the grid was skipped because the image size
                does not match the calculator.
        """

        if spacing_deg <= 0:
            raise ValueError(
                "Overlay.draw_fov_grid: spacing_deg must be a positive number."
            )

        if line_color is None:
            line_color = self.GRAY

        h, w = image.shape[:2]
        span = w if horizontal else h
        if int(round(calculator.pixels)) != span:
            return False

        center = span / 2
        half_fov = calculator.fov_deg / 2

        angle = 0.0
        while angle < half_fov:
            offset = calculator.pixel_offset_from_angle(angle)
            for sign in ((1,) if angle == 0 else (1, -1)):
                pos = int(round(center + sign * offset))
                if horizontal:
                    cv.line(image, (pos, 0), (pos, h - 1), line_color, 1)
                    label_pos = (pos + self.TEXT_GAP, h - self.TEXT_GAP * 4)
                else:
                    cv.line(image, (0, pos), (w - 1, pos), line_color, 1)
                    label_pos = (self.TEXT_GAP, pos - self.TEXT_GAP)

                if text_color is not None:
                    self._draw_text(
                        image, f"{sign * angle:g}", label_pos, text_color
                    )
            angle += spacing_deg

        if text_color is not None:
            prefix = "Hor: " if horizontal else "Ver: "
            text = prefix + str(calculator)
            (text_w, text_h), _ = cv.getTextSize(
                text, self.FONT, self.TEXT_SIZE, self.TEXT_THICKNESS
            )
            y = self.TEXT_GAP + text_h if horizontal else h - self.TEXT_GAP * 4
            self._draw_text(
                image, text, (w - self.TEXT_GAP - text_w, y), text_color
            )

        return True

    # -------------------------------------------------------------------------
    # Text---------------------------------------------------------------------
    # -------------------------------------------------------------------------

    def _draw_text(
        self,
        image: np.ndarray,
        text: str,
        position: Tuple[int, int],
        color: Optional[Color] = None,
        background: Optional[Color] = None,
    ) -> None:
        """
        Draw text with its baseline at position, optionally on a filled
        background box.
        """

        if color is None:
            color = self.WHITE

        if background is not None:
            (text_w, text_h), baseline = cv.getTextSize(
                text, self.FONT, self.TEXT_SIZE, self.TEXT_THICKNESS
            )
            x, y = position
            cv.rectangle(
                image,
                (x, y - text_h - self.TEXT_GAP // 2),
                (x + text_w, y + baseline),
                background,
                -1,
            )

        cv.putText(
            image,
            text,
            position,
            self.FONT,
            self.TEXT_SIZE,
            color,
            self.TEXT_THICKNESS,
        )


def _info_text(label: str, rotation: float, distance: float, pt: Point3) -> str:
    return (
        f"{label}: {rotation:.1f} deg, {distance:.1f} "
        f"[{pt.x:.1f}, {pt.y:.1f}, {pt.z:.1f}]"
    )


def _to_px(point) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))
