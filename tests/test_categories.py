import math

from boundaryspace.records.schema import CompatibilityCategory, InsightStatus
from boundaryspace.scoring import aggregate_overall, score_categories
from boundaryspace.scoring.categories import impact_score, mean_change, ratio_score, round_half_up


def test_single_positive_interaction_scores(baseline, good_interaction):
    insights = score_categories([good_interaction], baseline, "Alex")

    assert [i.category for i in insights] == list(CompatibilityCategory)
    assert [i.score for i in insights] == [100.0, 100.0, 100.0, 80.0, 70.0]

    overall = aggregate_overall(insights)
    assert overall.score == 90.0
    assert overall.label == "Highly Compatible"
    assert overall.status is InsightStatus.EXCELLENT


def test_communication_three_of_ten_is_poor(baseline, make_interaction):
    interactions = [
        make_interaction(communication_style_respected=k < 3) for k in range(10)
    ]
    communication = score_categories(interactions, baseline, "Alex")[0]

    assert communication.score == 30.0
    assert communication.status is InsightStatus.POOR
    assert communication.insight == "Your communication style is respected in 30% of interactions"
    assert communication.recommendation == (
        "Consider discussing your direct communication preference with Alex"
    )


def test_no_interactions_or_no_baseline_gives_no_insights(baseline, good_interaction):
    assert score_categories([], baseline, "Alex") == []
    assert score_categories([good_interaction], None, "Alex") == []


def test_unchanged_energy_scores_fifty(baseline, make_interaction):
    interactions = [
        make_interaction(energy_before=v, energy_after=v, self_worth_before=v, self_worth_after=v)
        for v in (2, 6, 9)
    ]
    insights = score_categories(interactions, baseline, "Alex")
    energy, self_worth = insights[3], insights[4]

    assert energy.score == 50.0
    assert self_worth.score == 50.0
    assert energy.status is InsightStatus.CONCERNING
    assert "drains your energy (0.0 average energy change)" in energy.insight


def test_missing_levels_read_as_midpoint(baseline, make_interaction):
    interaction = make_interaction(energy_after=8)
    energy = score_categories([interaction], baseline, "Alex")[3]
    assert energy.score == 80.0

    assert mean_change([make_interaction(energy_before=float("nan"))],
                       lambda i: i.energy_before, lambda i: i.energy_after) == 0.0


def test_zero_level_is_not_missing(make_interaction):
    interaction = make_interaction(energy_before=0, energy_after=3)
    assert mean_change([interaction], lambda i: i.energy_before, lambda i: i.energy_after) == 3.0


def test_impact_score_clamps():
    assert impact_score(-7.0) == 0.0
    assert impact_score(6.5) == 100.0
    assert impact_score(0.0) == 50.0
    assert impact_score(float("nan")) == 50.0


def test_draining_relationship_recommendations(baseline, make_interaction):
    interactions = [
        make_interaction(energy_before=8, energy_after=4, self_worth_before=7, self_worth_after=4)
        for _ in range(2)
    ]
    insights = score_categories(interactions, baseline, "Sam")
    energy, self_worth = insights[3], insights[4]

    assert energy.score == 10.0
    assert energy.status is InsightStatus.POOR
    assert energy.insight == "This relationship drains your energy (-4.0 average energy change)"
    assert energy.recommendation.startswith("Consider limiting time")
    assert self_worth.score == 20.0
    assert self_worth.recommendation.startswith("This relationship may be damaging")


def test_scores_always_in_range(baseline, make_interaction):
    interactions = [
        make_interaction(energy_before=1, energy_after=10, self_worth_before=10, self_worth_after=1),
        make_interaction(energy_before=-20, energy_after=40, self_worth_before=50, self_worth_after=-3),
    ]
    for insight in score_categories(interactions, baseline, "Alex"):
        assert 0.0 <= insight.score <= 100.0
        assert not math.isnan(insight.score)


def test_scoring_is_idempotent(baseline, good_interaction, make_interaction):
    interactions = [good_interaction, make_interaction(energy_before=6, energy_after=3)]
    first = [i.to_dict() for i in score_categories(interactions, baseline, "Alex")]
    second = [i.to_dict() for i in score_categories(interactions, baseline, "Alex")]
    assert first == second


def test_more_respect_never_lowers_score(baseline, make_interaction):
    interactions = [make_interaction(boundaries_respected=k < 2) for k in range(5)]
    before = score_categories(interactions, baseline, "Alex")[1].score

    interactions[4] = make_interaction(boundaries_respected=True)
    after = score_categories(interactions, baseline, "Alex")[1].score

    assert before == 40.0
    assert after == 60.0


def test_ratio_and_rounding_helpers():
    assert ratio_score([]) == 0.0
    assert ratio_score([True, False, False]) == 100.0 / 3
    assert round_half_up(62.5) == 63
    assert round_half_up(67.4) == 67


def test_aggregate_empty_is_zero():
    overall = aggregate_overall([])
    assert overall.score == 0.0
    assert overall.label == "Low Compatibility"


def test_unusable_levels_read_as_midpoint(baseline, make_interaction):
    interaction = make_interaction(
        energy_before="abc", energy_after=7,
        self_worth_before=float("inf"), self_worth_after=[3],
    )
    insights = score_categories([interaction], baseline, "Alex")
    assert insights[3].score == 70.0
    assert insights[4].score == 50.0
