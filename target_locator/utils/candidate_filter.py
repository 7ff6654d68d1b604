"""
Target candidate filtering.

Keeps only the polygons whose bounding box metrics fall strictly inside
the bounds of a TargetProfile. Optionally checks that a polygon lies
within vertical frame limits and that the middle of the shape is empty
in the binary mask it was found in (U shaped retro-reflective targets).

Classes:
    TargetCandidate: Accepted polygon plus the profile that accepted it
    CandidateFilter: Profile bound filter with diagnostics

Functions:
    filter_candidates: Pure metric filter

Usage:
    accepted = filter_candidates(polygons, profile)

    cf = CandidateFilter(profile, debug=True)
    accepted, rejected = cf.partition(polygons, mask)
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .config import HoleCheck, TargetProfile
from .errors import tested
from .polygon import Polygon


class TargetCandidate(NamedTuple):
    """
    Polygon that passed a filter and the name of the profile used.
    """

    polygon: Polygon
    profile_name: str


@tested
def filter_candidates(
    polygons: Sequence[Polygon], profile: TargetProfile
) -> List[Polygon]:
    """
    Keep the polygons whose five metrics are all strictly within the
    profile's bounds.

    The input is not modified and the order of the survivors is kept.

    Args:
        polygons (Sequence[Polygon]): Polygons to filter.
        profile (TargetProfile): Bounds to apply.

    Returns:
        List[Polygon]: The polygons that passed, in input order.
    """

    return [p for p in polygons if not _metric_failures(p, profile)]


def _metric_failures(polygon: Polygon, profile: TargetProfile) -> List[str]:
    failures = []
    for name, spec in profile.metrics().items():
        value = getattr(polygon, name)
        if not spec.accepts(value):
            failures.append(
                f"{name} {value:g} not in ({spec.min:g}, {spec.max:g})"
            )
    return failures


class CandidateFilter:
    """
    Filter bound to one TargetProfile.

    In addition to the metric bounds it applies the profile's optional
    frame limits (min_y, max_y) and, when a binary mask is supplied, the
    profile's optional hole check.

    Usage:
        cf = CandidateFilter(profile)
        if cf.accepts(polygon, mask):
            ...
    """

    @tested
    def __init__(self, profile: TargetProfile, debug: bool = False) -> None:
        """
        Args:
            profile (TargetProfile): Bounds and optional extra checks.
            debug (bool): Print the reason each polygon is rejected.
        """

        if not isinstance(profile, TargetProfile):
            raise ValueError(
                "CandidateFilter.__init__: profile must be a TargetProfile."
            )

        self.profile = profile
        self.debug = debug

    # -------------------------------------------------------------------------
    # Checks-------------------------------------------------------------------
    # -------------------------------------------------------------------------

    @tested
    def rejection_reasons(
        self, polygon: Polygon, mask: Optional[np.ndarray] = None
    ) -> List[str]:
        """
        List why a polygon is not a candidate.

        Args:
            polygon (Polygon): Polygon to check.
            mask (Optional[np.ndarray]): Binary image (0 / 255) the
                polygon was found in. The hole check is skipped without
                it.

        Returns:
            List[str]: Human readable reasons. Empty when accepted.
        """

        reasons = _metric_failures(polygon, self.profile)

        min_y = self.profile.min_y
        if min_y is not None and not polygon.min_y > min_y:
            reasons.append(f"min_y {polygon.min_y:g} not above {min_y:g}")

        max_y = self.profile.max_y
        if max_y is not None and not polygon.max_y < max_y:
            reasons.append(f"max_y {polygon.max_y:g} not below {max_y:g}")

        hole_check = self.profile.hole_check
        if hole_check is not None and mask is not None:
            filled = fill_percent(polygon, mask, hole_check)
            if filled is not None and filled > hole_check.max_fill_percent:
                reasons.append(
                    f"middle is {filled:g}% filled "
                    f"(max {hole_check.max_fill_percent:g}%)"
                )

        return reasons

    def accepts(
        self, polygon: Polygon, mask: Optional[np.ndarray] = None
    ) -> bool:
        return not self.rejection_reasons(polygon, mask)

    @tested
    def partition(
        self,
        polygons: Sequence[Polygon],
        mask: Optional[np.ndarray] = None,
    ) -> Tuple[List[Polygon], List[Polygon]]:
        """
        Split polygons into accepted and rejected lists (order kept).

        Returns:
            Tuple[List[Polygon], List[Polygon]]: (accepted, rejected)
        """

        accepted = []
        rejected = []

        for index, polygon in enumerate(polygons):
            reasons = self.rejection_reasons(polygon, mask)
            if reasons:
                rejected.append(polygon)
                if self.debug:
                    print(
                        f"CandidateFilter.partition: Rejected polygon "
                        f"{index}: {', '.join(reasons)}"
                    )
            else:
                accepted.append(polygon)

        if self.debug:
            print(
                f"CandidateFilter.partition: {len(accepted)} of "
                f"{len(polygons)} polygons accepted by profile "
                f"'{self.profile.name}'"
            )

        return accepted, rejected

    def filter(
        self,
        polygons: Sequence[Polygon],
        mask: Optional[np.ndarray] = None,
    ) -> List[Polygon]:
        return self.partition(polygons, mask)[0]

    def candidates(
        self,
        polygons: Sequence[Polygon],
        mask: Optional[np.ndarray] = None,
    ) -> List[TargetCandidate]:
        """
        Filter and tag each survivor with the profile's name.
        """

        return [
            TargetCandidate(p, self.profile.name)
            for p in self.filter(polygons, mask)
        ]


@tested
def fill_percent(
    polygon: Polygon, mask: np.ndarray, hole_check: HoleCheck
) -> Optional[float]:
    """
    Percentage of non-zero mask pixels in the middle of a polygon.

    The polygon's bounding box is trimmed by the hole check ratios,
    truncated to whole pixels and clipped to the mask.

    Args:
        polygon (Polygon): Polygon found in the mask.
        mask (np.ndarray): 2D binary image.
        hole_check (HoleCheck): Trim ratios.

    Returns:
        Optional[float]: Filled percentage rounded to a whole number, or
            None if the trimmed window holds no pixels.

    Raises:
        ValueError: If the mask is not a 2D array.
    """

    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise ValueError("fill_percent: mask must be a 2D array.")

    w = polygon.width
    h = polygon.height

    x0 = int(polygon.min_x + w * hole_check.left)
    x1 = int(polygon.max_x - w * hole_check.right)
    y0 = int(polygon.min_y + h * hole_check.top)
    y1 = int(polygon.max_y - h * hole_check.bottom)

    rows, cols = mask.shape
    x0, x1 = max(x0, 0), min(x1, cols)
    y0, y1 = max(y0, 0), min(y1, rows)

    if x1 <= x0 or y1 <= y0:
        return None

    window = mask[y0:y1, x0:x1]
    return float(round(100.0 * np.count_nonzero(window) / window.size))
