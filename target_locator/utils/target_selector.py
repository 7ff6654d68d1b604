"""
Best target selection.

Scores candidate polygons by how far their metrics are from a profile's
ideal values and picks the highest scoring one. Selection never modifies
the caller's list; the winner and the remaining candidates are returned
separately.

Classes:
    Selection: Result of a selection (NamedTuple)
    TargetSelector: Profile bound selector with optional diagnostics

Functions:
    score_candidate: Score one polygon against a profile
    select_best: Pick the best polygon from a list

Usage:
    selection = select_best(candidates, profile)
    if selection.winner is not None:
        solve(selection.winner)
"""

from typing import List, NamedTuple, Optional, Sequence

from .config import TargetProfile
from .errors import tested
from .polygon import Polygon

# Score of a polygon matching every ideal value exactly.
SCORE_BASELINE = 1_000_000.0

# A candidate must score above this to beat the running best.
SCORE_THRESHOLD = 0.0


class Selection(NamedTuple):
    """
    Winner of a selection, the other candidates in their original order
    and the winner's score. winner and score are None for empty input.
    """

    winner: Optional[Polygon]
    remaining: List[Polygon]
    score: Optional[float]


@tested
def score_candidate(polygon: Polygon, profile: TargetProfile) -> float:
    """
    Score a polygon: SCORE_BASELINE minus the weighted distance of each
    metric from its ideal value. Higher is better.
    """

    score = SCORE_BASELINE
    for name, spec in profile.metrics().items():
        score -= spec.penalty(getattr(polygon, name))
    return score


@tested
def select_best(
    candidates: Sequence[Polygon], profile: TargetProfile
) -> Selection:
    """
    Pick the highest scoring candidate.

    Candidates are scanned in order and one replaces the running best
    only if it scores strictly higher, so the earliest of equal scores
    wins. The running best starts at SCORE_THRESHOLD. When no candidate
    scores above it, the first candidate is returned.

    Args:
        candidates (Sequence[Polygon]): Polygons that passed the filter.
        profile (TargetProfile): Ideal values and weights.

    Returns:
        Selection: winner, remaining (input minus the winner, one shorter
            than the input) and the winner's score.
    """

    if len(candidates) == 0:
        return Selection(None, [], None)

    best_index = 0
    best_score = SCORE_THRESHOLD
    scores = [score_candidate(p, profile) for p in candidates]

    for index, score in enumerate(scores):
        if score > best_score:
            best_index = index
            best_score = score

    remaining = [p for i, p in enumerate(candidates) if i != best_index]
    return Selection(candidates[best_index], remaining, scores[best_index])


class TargetSelector:
    """
    Selector bound to one TargetProfile.
    """

    def __init__(self, profile: TargetProfile, debug: bool = False) -> None:
        if not isinstance(profile, TargetProfile):
            raise ValueError(
                "TargetSelector.__init__: profile must be a TargetProfile."
            )

        self.profile = profile
        self.debug = debug

    @tested
    def select(self, candidates: Sequence[Polygon]) -> Selection:
        selection = select_best(candidates, self.profile)

        if self.debug:
            for index, polygon in enumerate(candidates):
                print(
                    f"TargetSelector.select: Candidate {index} score "
                    f"{score_candidate(polygon, self.profile):.2f}"
                )

            if selection.winner is None:
                print("TargetSelector.select: No candidates to select from")
            elif selection.score <= SCORE_THRESHOLD:
                print(
                    "TargetSelector.select: WARNING: No candidate scored "
                    "above the threshold, using the first one"
                )

        return selection
