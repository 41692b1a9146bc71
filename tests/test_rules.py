"""Unit tests for the questionnaire scoring rules."""
import pytest

from relationship_report.domain.models import FollowUpAnswers, QualitativeLikelihood
from relationship_report.domain.rules import (
    DIMENSION_LABELS,
    concern_level_for,
    health_score_for,
    likelihood_for,
    score,
)


FIELDS = list(DIMENSION_LABELS.keys())


def make_answers(scores):
    return FollowUpAnswers(**dict(zip(FIELDS, scores)))


class TestScoreExamples:
    """Worked examples."""

    def test_low_scores(self):
        metrics = score(make_answers([2, 2, 1, 1, 1, 2, 2]))
        assert metrics.average_score == pytest.approx(11 / 7)
        assert metrics.concern_level == 3
        assert metrics.health_score == 8
        # 1.57 falls in the first likelihood band (<= 2.0)
        assert metrics.qualitative_likelihood == QualitativeLikelihood.HIGHLY_UNLIKELY
        assert metrics.high_concern_count == 0
        assert metrics.moderate_concern_count == 0

    def test_all_fives(self):
        metrics = score(make_answers([5, 5, 5, 5, 5, 5, 5]))
        assert metrics.average_score == 5
        assert metrics.concern_level == 9
        assert metrics.health_score == 2
        assert metrics.qualitative_likelihood == QualitativeLikelihood.LIKELY
        assert metrics.qualitative_likelihood.value == "Likely"
        assert metrics.high_concern_count == 7

    def test_all_ones(self):
        metrics = score(make_answers([1] * 7))
        assert metrics.concern_level == 1
        assert metrics.health_score == 10
        assert metrics.qualitative_likelihood == QualitativeLikelihood.HIGHLY_UNLIKELY

    def test_mixed_counts(self):
        metrics = score(make_answers([3, 3, 4, 5, 1, 2, 3]))
        assert metrics.high_concern_count == 2
        assert metrics.moderate_concern_count == 3
        assert metrics.average_score == pytest.approx(3.0)
        assert metrics.concern_level == 5
        assert metrics.health_score == 6
        assert metrics.qualitative_likelihood == QualitativeLikelihood.INCONCLUSIVE

    def test_unlikely_band(self):
        # 19 / 7 = 2.71
        metrics = score(make_answers([3, 3, 3, 3, 3, 2, 2]))
        assert metrics.qualitative_likelihood.value == "Unlikely"
        assert metrics.concern_level == 5


class TestConcernLadder:
    """Threshold ladder for the concern level."""

    @pytest.mark.parametrize(
        "average,expected",
        [
            (1.0, 1),
            (1.5, 1),
            (1.51, 3),
            (2.0, 3),
            (2.01, 4),
            (2.5, 4),
            (3.0, 5),
            (3.5, 6),
            (4.0, 7),
            (4.5, 8),
            (4.51, 9),
            (5.0, 9),
        ],
    )
    def test_boundaries(self, average, expected):
        assert concern_level_for(average) == expected

    def test_level_two_is_never_produced(self):
        levels = {concern_level_for(total / 7) for total in range(7, 36)}
        assert 2 not in levels
        assert levels == {1, 3, 4, 5, 6, 7, 8, 9}

    def test_monotonic_in_average(self):
        levels = [concern_level_for(total / 7) for total in range(7, 36)]
        assert levels == sorted(levels)

    def test_raising_one_answer_never_lowers_concern(self):
        bases = [[1] * 7, [2, 2, 1, 1, 1, 2, 2], [3, 1, 4, 2, 5, 1, 3], [4, 4, 4, 4, 4, 4, 1]]
        for base in bases:
            before = score(make_answers(base)).concern_level
            for i in range(7):
                if base[i] == 5:
                    continue
                raised = list(base)
                raised[i] += 1
                assert score(make_answers(raised)).concern_level >= before


class TestHealthScore:
    """Health score derived from the concern level."""

    def test_health_formula_holds_for_all_totals(self):
        for total in range(7, 36):
            level = concern_level_for(total / 7)
            assert health_score_for(level) == max(1, 11 - level)

    def test_health_never_below_one(self):
        assert health_score_for(9) == 2
        assert health_score_for(10) == 1
        assert health_score_for(15) == 1


class TestLikelihoodLadder:
    """Second, independent ladder for the qualitative label."""

    @pytest.mark.parametrize(
        "average,expected",
        [
            (2.0, QualitativeLikelihood.HIGHLY_UNLIKELY),
            (2.01, QualitativeLikelihood.UNLIKELY),
            (2.8, QualitativeLikelihood.UNLIKELY),
            (2.81, QualitativeLikelihood.INCONCLUSIVE),
            (3.5, QualitativeLikelihood.INCONCLUSIVE),
            (4.2, QualitativeLikelihood.POSSIBLE),
            (4.21, QualitativeLikelihood.LIKELY),
        ],
    )
    def test_boundaries(self, average, expected):
        assert likelihood_for(average) == expected


class TestAnswersModel:
    """Range checks happen when the answers are built."""

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            make_answers([0, 1, 1, 1, 1, 1, 1])
        with pytest.raises(ValueError):
            make_answers([6, 1, 1, 1, 1, 1, 1])

    def test_wire_names_accepted(self):
        answers = FollowUpAnswers(
            emotionalDistance=1,
            technologyPrivacy=2,
            scheduleChanges=3,
            appearanceChanges=4,
            intimacyChanges=5,
            defensiveness=1,
            interestInYou=2,
        )
        assert answers.as_list() == [1, 2, 3, 4, 5, 1, 2]
