from .utils import (
    TargetLocatorError,
    TargetConfigError,
    MetricSpec,
    HoleCheck,
    TargetProfile,
    CameraConfig,
    TargetGeometry,
    LocatorConfig,
    Polygon,
    VerticalEdge,
    CandidateFilter,
    TargetCandidate,
    filter_candidates,
    Selection,
    TargetSelector,
    score_candidate,
    select_best,
    FovCalculator,
    AovCalculator,
    Point3,
    LineSegmentSolution,
    LineSegmentTarget,
    solve_line_segment,
    NO_SOLUTION,
    RectangularSolution,
    RectangularTarget,
    RotationEstimator,
    TargetTelemetry,
    TelemetryEstimator,
    Overlay,
    LocatorResult,
    TargetLocator,
)

__all__ = [
    "TargetLocatorError",
    "TargetConfigError",
    "MetricSpec",
    "HoleCheck",
    "TargetProfile",
    "CameraConfig",
    "TargetGeometry",
    "LocatorConfig",
    "Polygon",
    "VerticalEdge",
    "CandidateFilter",
    "TargetCandidate",
    "filter_candidates",
    "Selection",
    "TargetSelector",
    "score_candidate",
    "select_best",
    "FovCalculator",
    "AovCalculator",
    "Point3",
    "LineSegmentSolution",
    "LineSegmentTarget",
    "solve_line_segment",
    "NO_SOLUTION",
    "RectangularSolution",
    "RectangularTarget",
    "RotationEstimator",
    "TargetTelemetry",
    "TelemetryEstimator",
    "Overlay",
    "LocatorResult",
    "TargetLocator",
]
