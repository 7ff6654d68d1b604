from .errors import (
    TargetLocatorError,
    TargetConfigError,
)
from .config import (
    MetricSpec,
    HoleCheck,
    TargetProfile,
    CameraConfig,
    TargetGeometry,
    LocatorConfig,
)
from .polygon import Polygon, VerticalEdge
from .candidate_filter import (
    CandidateFilter,
    TargetCandidate,
    filter_candidates,
)
from .target_selector import (
    Selection,
    TargetSelector,
    score_candidate,
    select_best,
)
from .fov_calculator import FovCalculator, AovCalculator
from .line_segment_target import (
    Point3,
    LineSegmentSolution,
    LineSegmentTarget,
    solve_line_segment,
)
from .rectangular_target import (
    NO_SOLUTION,
    RectangularSolution,
    RectangularTarget,
)
from .rotation_estimator import RotationEstimator
from .telemetry import TargetTelemetry, TelemetryEstimator
from .overlay import Overlay
from .locator import LocatorResult, TargetLocator

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
