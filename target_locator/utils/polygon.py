"""
Polygon summary of a detected shape.

Provides an immutable wrapper around an ordered sequence of 2D pixel
points (typically a simplified OpenCV contour). In addition to the
vertices, the polygon pre-computes its bounding box and the metrics
derived from it, and can locate the near-vertical left and right edges
used to triangulate rectangular targets.

Classes:
    VerticalEdge: Pair of end points of a vertical edge (NamedTuple)
    Polygon: Immutable polygon with bounding box metrics

Pixel convention:
    (0, 0) is the top left corner of the image, x grows to the right
    and y grows down the image.

Usage:
    poly = Polygon.from_contour(contour, epsilon=5.0)
    if poly.width > 40:
        edge = poly.find_left_edge(0.05)
"""

import cv2 as cv
import numpy as np
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .errors import tested

PointPx = Tuple[float, float]


class VerticalEdge(NamedTuple):
    """
    End points of a vertical edge found in a polygon.

    Note:
        ``bottom`` is the vertex with the SMALLEST pixel y, which is the
        upper end on screen, and ``top`` the one with the largest pixel
        y. The names are kept as they are because callers average the
        bottom points of two edges together (and the top points
        together); only the pairing has to be consistent between edges.
    """

    bottom: PointPx
    top: PointPx


class Polygon:
    """
    Immutable geometric summary of an ordered point sequence.

    The bounding box metrics are computed once at construction. A
    polygon with no points has every derived value set to 0. A polygon
    whose bounding box has no height reports ASPECT_RATIO_SENTINEL as
    its aspect ratio.

    Usage:
        poly = Polygon.from_points([(10, 10), (50, 10), (50, 30)])
        poly.width           # 40.0
        poly.aspect_ratio    # 2.0
        poly.contains(poly)  # True
    """

    # -------------------------------------------------------------------------
    # Class constants----------------------------------------------------------
    # -------------------------------------------------------------------------

    # Aspect ratio reported when the bounding box has zero height.
    ASPECT_RATIO_SENTINEL = float(np.finfo(np.float32).max)

    # Index of each coordinate in a point.
    X = 0
    Y = 1

    # -------------------------------------------------------------------------
    # Initialisation functions-------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def __init__(self, points: Iterable[Sequence[float]] = ()) -> None:
        """
        Build a polygon from an ordered sequence of (x, y) points.

        Args:
            points: Sequence of (x, y) pairs, an (n, 2) array or an
                OpenCV style (n, 1, 2) array. May be empty.

        Raises:
            ValueError: If the points cannot be read as (x, y) pairs.
        """

        if not isinstance(points, np.ndarray):
            points = list(points)

        array = np.asarray(points, dtype=np.float64)
        if array.size == 0:
            array = np.zeros((0, 2), dtype=np.float64)
        else:
            array = array.reshape(-1, array.shape[-1])
            if array.shape[1] != 2:
                raise ValueError(
                    "Polygon.__init__: points must be (x, y) pairs."
                )

        array = array.copy()
        array.setflags(write=False)
        self._points = array

        self._analyze()

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "Polygon":
        """
        Build a polygon from an already simplified point sequence.
        """

        return cls(points)

    @classmethod
    @tested
    def from_contour(cls, contour: np.ndarray, epsilon: float) -> "Polygon":
        """
        Build a polygon by simplifying a raw OpenCV contour.

        The contour is reduced to a small set of vertices with
        cv.approxPolyDP (treating the contour as closed).

        Args:
            contour (np.ndarray): Contour as returned by cv.findContours
            epsilon (float): Maximum distance in pixels between the
                contour and its approximation. Larger values produce
                fewer vertices.

        Returns:
            Polygon: Polygon made of the simplified vertices.
        """

        if epsilon < 0:
            raise ValueError(
                "Polygon.from_contour: epsilon must be a non-negative number."
            )

        contour_2f = np.asarray(contour, dtype=np.float32).reshape(-1, 1, 2)
        if len(contour_2f) == 0:
            return cls()

        approx = cv.approxPolyDP(contour_2f, epsilon, True)
        return cls(approx.reshape(-1, 2))

    def _analyze(self) -> None:
        """
        Pre-compute the bounding box and derived metrics.
        """

        if len(self._points) == 0:
            self._min_x = self._max_x = 0.0
            self._min_y = self._max_y = 0.0
            self._width = self._height = 0.0
            self._aspect_ratio = self._bounding_area = 0.0
            self._closed = False
            return

        xs = self._points[:, self.X]
        ys = self._points[:, self.Y]

        self._min_x = float(xs.min())
        self._max_x = float(xs.max())
        self._min_y = float(ys.min())
        self._max_y = float(ys.max())
        self._width = self._max_x - self._min_x
        self._height = self._max_y - self._min_y

        if self._height > 0:
            self._aspect_ratio = self._width / self._height
        else:
            self._aspect_ratio = self.ASPECT_RATIO_SENTINEL

        self._bounding_area = self._width * self._height
        self._closed = bool(np.array_equal(self._points[0], self._points[-1]))

    # -------------------------------------------------------------------------
    # Properties---------------------------------------------------------------
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._points)

    @property
    def vertex_count(self) -> int:
        return len(self._points)

    @property
    def points(self) -> np.ndarray:
        """
        Copy of the vertices as an (n, 2) float array.
        """

        return self._points.copy()

    @property
    def min_x(self) -> float:
        return self._min_x

    @property
    def max_x(self) -> float:
        return self._max_x

    @property
    def min_y(self) -> float:
        return self._min_y

    @property
    def max_y(self) -> float:
        return self._max_y

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def center_x(self) -> float:
        return (self._min_x + self._max_x) / 2

    @property
    def center_y(self) -> float:
        return (self._min_y + self._max_y) / 2

    @property
    def aspect_ratio(self) -> float:
        """
        Bounding box width / height (< 1.0 is tall and skinny, > 1.0 is
        short and fat).
        """

        return self._aspect_ratio

    @property
    def bounding_area(self) -> float:
        return self._bounding_area

    @property
    def closed(self) -> bool:
        """
        True if the first and last points are identical.
        """

        return self._closed

    def point(self, index: int) -> PointPx:
        """
        Get the (x, y) coordinates of a single vertex.

        Args:
            index (int): Vertex index in the range [0, len(polygon) - 1]

        Returns:
            PointPx: The (x, y) pixel coordinates.
        """

        x, y = self._points[index]
        return (float(x), float(y))

    def to_contour(self) -> np.ndarray:
        """
        Convert the vertices to an integer contour usable by OpenCV
        drawing functions.

        Returns:
            np.ndarray: int32 array of shape (n, 1, 2).
        """

        return np.round(self._points).astype(np.int32).reshape(-1, 1, 2)

    # -------------------------------------------------------------------------
    # Edge finding-------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def points_in_x_range(self, x_min: float, x_max: float) -> List[PointPx]:
        """
        Return the vertices whose x coordinate is in [x_min, x_max].
        """

        xs = self._points[:, self.X]
        mask = (xs >= x_min) & (xs <= x_max)
        return [(float(x), float(y)) for x, y in self._points[mask]]

    @tested
    def find_vertical_edge(
        self, x_min: float, x_max: float
    ) -> Optional[VerticalEdge]:
        """
        Find the end points of a vertical edge within an x range.

        Looks at every vertex whose x coordinate lies in [x_min, x_max]
        and keeps the one with the smallest pixel y as ``bottom`` and the
        one with the largest pixel y as ``top``. When several vertices
        share the extreme y value the first one is kept.

        Args:
            x_min (float): Minimum x value for a vertex to be included.
            x_max (float): Maximum x value for a vertex to be included.

        Returns:
            Optional[VerticalEdge]: The edge, or None if fewer than two
                vertices fall in the range.
        """

        xs = self._points[:, self.X]
        in_range = self._points[(xs >= x_min) & (xs <= x_max)]

        if len(in_range) < 2:
            return None

        ys = in_range[:, self.Y]
        bottom = in_range[int(np.argmin(ys))]
        top = in_range[int(np.argmax(ys))]

        return VerticalEdge(
            bottom=(float(bottom[0]), float(bottom[1])),
            top=(float(top[0]), float(top[1])),
        )

    def find_left_edge(self, tolerance: float) -> Optional[VerticalEdge]:
        """
        Find the left most vertical edge of the polygon.

        Args:
            tolerance (float): How far in from the left side of the
                bounding box to accept vertices, as a ratio of the width
                (0.0 to 1.0).
        """

        x_min = self._min_x
        x_max = x_min + self._width * tolerance
        return self.find_vertical_edge(x_min, x_max)

    def find_right_edge(self, tolerance: float) -> Optional[VerticalEdge]:
        """
        Find the right most vertical edge of the polygon.

        Args:
            tolerance (float): How far in from the right side of the
                bounding box to accept vertices, as a ratio of the width
                (0.0 to 1.0).
        """

        x_max = self._max_x
        x_min = x_max - self._width * tolerance
        return self.find_vertical_edge(x_min, x_max)

    # -------------------------------------------------------------------------
    # Comparison---------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def contains(self, other: "Polygon") -> bool:
        """
        Check whether this polygon's bounding box encloses the bounding
        box of another polygon (edges may touch).
        """

        return (
            self._min_x <= other.min_x
            and self._max_x >= other.max_x
            and self._min_y <= other.min_y
            and self._max_y >= other.max_y
        )

    def __repr__(self) -> str:
        return (
            f"Polygon(n={len(self)}, x={self._min_x}, y={self._min_y}, "
            f"width={self._width}, height={self._height}, "
            f"aspect={self._aspect_ratio}, area={self._bounding_area})"
        )
