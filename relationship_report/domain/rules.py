import logging
from typing import List, Tuple

from .models import FollowUpAnswers, QualitativeLikelihood, RiskMetrics


logger = logging.getLogger(__name__)


DIMENSION_LABELS = {
    "emotional_distance": "Emotional distance",
    "technology_privacy": "Technology/privacy changes",
    "schedule_changes": "Schedule changes",
    "appearance_changes": "Appearance/spending changes",
    "intimacy_changes": "Intimacy changes",
    "defensiveness": "Defensiveness",
    "interest_in_you": "Interest in you",
}

# (upper bound on the average, value); evaluated in order, first match wins.
# Level 2 is never produced: averages in (1.5, 2.0] map straight to 3.
CONCERN_LEVEL_LADDER: Tuple[Tuple[float, int], ...] = (
    (1.5, 1),
    (2.0, 3),
    (2.5, 4),
    (3.0, 5),
    (3.5, 6),
    (4.0, 7),
    (4.5, 8),
)
MAX_CONCERN_LEVEL = 9

LIKELIHOOD_LADDER: Tuple[Tuple[float, QualitativeLikelihood], ...] = (
    (2.0, QualitativeLikelihood.HIGHLY_UNLIKELY),
    (2.8, QualitativeLikelihood.UNLIKELY),
    (3.5, QualitativeLikelihood.INCONCLUSIVE),
    (4.2, QualitativeLikelihood.POSSIBLE),
)
MAX_LIKELIHOOD = QualitativeLikelihood.LIKELY

HIGH_CONCERN_THRESHOLD = 4
MODERATE_CONCERN_SCORE = 3


def concern_level_for(average: float) -> int:
    for bound, level in CONCERN_LEVEL_LADDER:
        if average <= bound:
            return level
    return MAX_CONCERN_LEVEL


def likelihood_for(average: float) -> QualitativeLikelihood:
    for bound, label in LIKELIHOOD_LADDER:
        if average <= bound:
            return label
    return MAX_LIKELIHOOD


def health_score_for(concern_level: int) -> int:
    return max(1, 11 - concern_level)


def score(answers: FollowUpAnswers) -> RiskMetrics:
    """Derive the risk indicators from the seven follow-up answers.

    Range checking happens when ``FollowUpAnswers`` is built, so this never
    sees an out-of-range score.
    """
    scores: List[int] = answers.as_list()
    average = sum(scores) / len(scores)
    concern_level = concern_level_for(average)

    metrics = RiskMetrics(
        average_score=average,
        high_concern_count=sum(1 for s in scores if s >= HIGH_CONCERN_THRESHOLD),
        moderate_concern_count=sum(1 for s in scores if s == MODERATE_CONCERN_SCORE),
        concern_level=concern_level,
        health_score=health_score_for(concern_level),
        qualitative_likelihood=likelihood_for(average),
    )
    logger.debug("Scores %s -> average %.2f, concern %s/10", scores, average, concern_level)
    return metrics
