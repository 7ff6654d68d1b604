"""
Target locator pipeline.

Ties the pieces together for one frame: raw contours from the vision
stage are simplified into polygons, filtered against the target
profile, the best candidate is selected and solved as a rectangular
target. The telemetry values for the robot are derived from the
solution, and a second estimate is made from the target polygon's width
and the configured target elevation.

Classes:
    LocatorResult: Everything produced for one frame
    TargetLocator: Pipeline built from a LocatorConfig

Usage:
    config = LocatorConfig.load("config.json")
    locator = TargetLocator(config)
    contours, _ = cv.findContours(mask, cv.RETR_LIST,
                                  cv.CHAIN_APPROX_SIMPLE)
    result = locator.process(contours, mask)
    if result.has_target:
        result.telemetry.publish(table.putNumber)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .candidate_filter import CandidateFilter
from .config import LocatorConfig
from .errors import tested
from .polygon import Polygon
from .rectangular_target import NO_SOLUTION, RectangularSolution, RectangularTarget
from .target_selector import TargetSelector
from .telemetry import TargetTelemetry, TelemetryEstimator


@dataclass(frozen=True)
class LocatorResult:
    """
    Output of TargetLocator.process() for one frame.
    """

    polygons: List[Polygon] = field(default_factory=list)
    accepted: List[Polygon] = field(default_factory=list)
    rejected: List[Polygon] = field(default_factory=list)
    best: Optional[Polygon] = None
    remaining: List[Polygon] = field(default_factory=list)
    solution: RectangularSolution = NO_SOLUTION
    telemetry: Optional[TargetTelemetry] = None
    estimate: Optional[TargetTelemetry] = None

    @property
    def has_target(self) -> bool:
        return self.solution.has_solution


class TargetLocator:
    """
    Runs the filter, selector and solver for each frame.

    The locator holds only immutable settings, so one instance can be
    shared by every frame of a stream.
    """

    @tested
    def __init__(self, config: LocatorConfig, debug: bool = False) -> None:
        """
        Args:
            config (LocatorConfig): Profile, camera and target settings.
            debug (bool): Print diagnostics for every stage.
        """

        if not isinstance(config, LocatorConfig):
            raise ValueError(
                "TargetLocator.__init__: config must be a LocatorConfig."
            )

        self.config = config
        self.debug = debug

        self.candidate_filter = CandidateFilter(config.profile, debug)
        self.selector = TargetSelector(config.profile, debug)
        self.solver = RectangularTarget.from_config(config)
        self.estimator = TelemetryEstimator(
            config.camera, config.target, config.aim_x_px, debug
        )

    @tested
    def process(
        self,
        contours: Sequence[np.ndarray],
        mask: Optional[np.ndarray] = None,
    ) -> LocatorResult:
        """
        Locate the target in one frame.

        Args:
            contours (Sequence[np.ndarray]): Contours as returned by
                cv.findContours.
            mask (Optional[np.ndarray]): Binary image the contours came
                from. Enables the profile's hole check.

        Returns:
            LocatorResult: has_target is False if no polygon passed the
                filter or the best one could not be solved.
        """

        epsilon = self.config.profile.polygon_epsilon
        polygons = [Polygon.from_contour(c, epsilon) for c in contours]

        accepted, rejected = self.candidate_filter.partition(polygons, mask)
        selection = self.selector.select(accepted)

        if selection.winner is None:
            if self.debug:
                print("TargetLocator.process: No target found")
            return LocatorResult(
                polygons=polygons, accepted=accepted, rejected=rejected
            )

        solution = self.solver.compute_solution(selection.winner)
        telemetry = TargetTelemetry.from_solution(solution)
        estimate = self.estimator.estimate(selection.winner)

        if self.debug:
            print(f"TargetLocator.process: Best {selection.winner!r}")
            print(f"TargetLocator.process: Solution {solution}")

        return LocatorResult(
            polygons=polygons,
            accepted=accepted,
            rejected=rejected,
            best=selection.winner,
            remaining=selection.remaining,
            solution=solution,
            telemetry=telemetry,
            estimate=estimate,
        )
