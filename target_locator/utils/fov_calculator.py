"""
Field of view (FOV) calculators.

Converts between pixel offsets from the image center, angular offsets
and real world lengths for a pinhole camera with a known, undistorted
field of view.

Classes:
    FovCalculator: FOV, pixel span and reference distance based converter
    AovCalculator: Focal length only converter (angle of view)

Usage:
    calc = FovCalculator(fov_deg=45.0, pixels=480, distance=100.0)
    angle = calc.angle_from_pixel_offset(120)        # degrees
    pixels = calc.pixel_offset_from_angle(angle)     # 120.0
    length = calc.length_from_pixel_offset(120)      # real world units

    # Vertical FOV from a horizontal one (same focal length)
    vertical = FovCalculator.from_reference(horizontal, pixels=480)
"""

import math
import numbers
from typing import Union

from .errors import tested

Number = Union[int, float]


class FovCalculator:
    """
    Calculator for one axis (horizontal or vertical) of a camera.

    Built from the full FOV of the axis in degrees, the number of pixels
    the FOV is mapped to, and the real world distance from the camera to
    the "wall" being looked at. All derived values are computed once;
    use with_distance() to get a calculator for another distance.

    Raises:
        ValueError: Invalid parameters
    """

    # -------------------------------------------------------------------------
    # Class constants----------------------------------------------------------
    # -------------------------------------------------------------------------

    DEFAULT_FOV_DEG = 60.0
    DEFAULT_PIXELS = 640
    DEFAULT_DISTANCE = 100.0

    # A pinhole camera can not see 180 degrees or more.
    MAX_FOV_DEG = 180.0

    # -------------------------------------------------------------------------
    # Initialisation functions-------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def __init__(
        self,
        fov_deg: Number = DEFAULT_FOV_DEG,
        pixels: Number = DEFAULT_PIXELS,
        distance: Number = DEFAULT_DISTANCE,
    ) -> None:
        """
        Initialise the calculator and pre-compute derived values.

        Args:
            fov_deg (Number): Full FOV covered by the pixels in degrees.
            pixels (Number): Number of pixels the FOV is mapped to
                (image width or height).
            distance (Number): Real world distance from the camera to the
                wall at the center of the image.

        Raises:
            ValueError: If fov_deg is not in (0, 180), or pixels or
                distance are not positive.
        """

        if not _is_number(fov_deg) or not 0 < fov_deg < self.MAX_FOV_DEG:
            raise ValueError(
                "FovCalculator.__init__: fov_deg must be a number in the "
                "range (0, 180)."
            )

        if not _is_number(pixels) or pixels <= 0:
            raise ValueError(
                "FovCalculator.__init__: pixels must be a positive number."
            )

        if not _is_number(distance) or distance <= 0:
            raise ValueError(
                "FovCalculator.__init__: distance must be a positive number."
            )

        self._fov_deg = float(fov_deg)
        self._pixels = float(pixels)
        self._distance = float(distance)

        self._fov_rad = math.radians(self._fov_deg)
        self._tan_half_fov = math.tan(self._fov_rad / 2)
        self._length = 2 * self._distance * self._tan_half_fov
        self._distance_px = self._distance * self._pixels / self._length

    @classmethod
    @tested
    def from_reference(
        cls, reference: "FovCalculator", pixels: Number
    ) -> "FovCalculator":
        """
        Build a calculator for another axis of the same camera.

        Typically used to get the vertical FOV when the horizontal FOV
        is known. The new FOV is twice the angle subtended by half of
        the new pixel span, so both calculators share a focal length.

        Args:
            reference (FovCalculator): Calculator for the known axis.
            pixels (Number): Number of pixels in the new axis.

        Returns:
            FovCalculator: Calculator for the new axis at the reference's
                distance.
        """

        if not _is_number(pixels) or pixels <= 0:
            raise ValueError(
                "FovCalculator.from_reference: pixels must be a positive "
                "number."
            )

        fov_deg = reference.angle_from_pixel_offset(pixels / 2) * 2
        return cls(fov_deg, pixels, reference.distance)

    def with_distance(self, distance: Number) -> "FovCalculator":
        """
        Return a calculator with the same FOV and pixels at a new distance.
        """

        return FovCalculator(self._fov_deg, self._pixels, distance)

    # -------------------------------------------------------------------------
    # Properties---------------------------------------------------------------
    # -------------------------------------------------------------------------

    @property
    def fov_deg(self) -> float:
        return self._fov_deg

    @property
    def fov_rad(self) -> float:
        return self._fov_rad

    @property
    def tan_half_fov(self) -> float:
        """
        Pre-computed tan(FOV / 2).
        """

        return self._tan_half_fov

    @property
    def pixels(self) -> float:
        return self._pixels

    @property
    def distance(self) -> float:
        """
        Distance to the wall in real world units.
        """

        return self._distance

    @property
    def distance_px(self) -> float:
        """
        Distance to the wall expressed in pixels.
        """

        return self._distance_px

    @property
    def focal_length_px(self) -> float:
        """
        Focal length in pixels: 0.5 * pixels / tan(FOV / 2).
        """

        return 0.5 * self._pixels / self._tan_half_fov

    @property
    def length(self) -> float:
        """
        Real world length of the wall covered by the FOV at the distance.
        """

        return self._length

    # -------------------------------------------------------------------------
    # Conversions--------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def angle_from_pixel_offset(self, pixel_offset: Number) -> float:
        """
        Degrees off center for a pixel offset from the image center.
        """

        return math.degrees(math.atan(pixel_offset / self._distance_px))

    @tested
    def pixel_offset_from_angle(self, angle_deg: Number) -> float:
        """
        Pixel offset from the image center for an angle off center.

        Note:
            The result can fall outside the image if the angle exceeds
            what the FOV can see.
        """

        return math.tan(math.radians(angle_deg)) * self._distance_px

    @tested
    def length_from_pixel_offset(self, pixel_offset: Number) -> float:
        """
        Real world offset on the wall for a pixel offset from center.
        """

        return self._distance / self._distance_px * pixel_offset

    def length_from_angle(self, angle_deg: Number) -> float:
        """
        Real world offset on the wall for an angle off center.
        """

        return math.tan(math.radians(angle_deg)) * self._distance

    def pixel_offset_from_length(self, length: Number) -> float:
        """
        Pixel offset from center for a real world offset on the wall.
        """

        return length * self._distance_px / self._distance

    # -------------------------------------------------------------------------
    # Representation-----------------------------------------------------------
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FovCalculator):
            return NotImplemented

        return (
            self._fov_deg == other._fov_deg
            and self._pixels == other._pixels
            and self._distance == other._distance
        )

    def __hash__(self) -> int:
        return hash((self._fov_deg, self._pixels, self._distance))

    def __str__(self) -> str:
        return (
            f'{{ "fov":{self._fov_deg:.1f}, "px":{round(self._pixels)}, '
            f'"dist":{self._distance:.1f}, "length":{self._length:.1f} }}'
        )

    def __repr__(self) -> str:
        return (
            f"FovCalculator(fov_deg={self._fov_deg}, pixels={self._pixels}, "
            f"distance={self._distance})"
        )


class AovCalculator:
    """
    Converts between pixel offsets from center and angles using only the
    camera's focal length in pixels.

    Cameras usually have the same focal length in both directions, so a
    single instance built from the horizontal FOV can also be used for
    vertical offsets.
    """

    @tested
    def __init__(self, focal_length_px: Number) -> None:
        if not _is_number(focal_length_px) or focal_length_px <= 0:
            raise ValueError(
                "AovCalculator.__init__: focal_length_px must be a positive "
                "number."
            )

        self._focal_length_px = float(focal_length_px)

    @classmethod
    def from_fov(cls, fov_deg: Number, pixels: Number) -> "AovCalculator":
        """
        Build from a full FOV in degrees and the pixels it spans.
        """

        return cls(compute_focal_length_px(fov_deg, pixels))

    @property
    def focal_length_px(self) -> float:
        return self._focal_length_px

    def to_angle(self, pixel_offset: Number) -> float:
        """
        Signed degrees off center for a pixel offset from center.
        """

        return math.degrees(math.atan(pixel_offset / self._focal_length_px))

    def to_pixel(self, angle_deg: Number) -> float:
        """
        Signed pixel offset from center for an angle off center.
        """

        return math.tan(math.radians(angle_deg)) * self._focal_length_px


def compute_focal_length_px(fov_deg: Number, pixels: Number) -> float:
    """
    Focal length in pixels for a full FOV (degrees) spanning some pixels.

    Raises:
        ValueError: If fov_deg is not in (0, 180) or pixels is not
            positive.
    """

    if not _is_number(fov_deg) or not 0 < fov_deg < FovCalculator.MAX_FOV_DEG:
        raise ValueError(
            "compute_focal_length_px: fov_deg must be a number in the range "
            "(0, 180)."
        )

    if not _is_number(pixels) or pixels <= 0:
        raise ValueError(
            "compute_focal_length_px: pixels must be a positive number."
        )

    return 0.5 * pixels / math.tan(math.radians(fov_deg) / 2)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)
