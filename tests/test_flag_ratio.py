import pytest

from boundaryspace.records.schema import Relationship, RelationshipStats
from boundaryspace.scoring import score_flag_balance, score_flag_ratio, summarize_relationships


def test_no_flags_is_neutral():
    result = score_flag_ratio(RelationshipStats())
    assert result.flag_ratio == 50
    assert result.score == 50
    assert result.label == "Fair Match"
    assert result.tier == "yellow"
    assert result.used_safety_rating is False


def test_flags_blend_with_safety_rating():
    result = score_flag_ratio(RelationshipStats(green_flags=8, red_flags=2, average_safety_rating=4))
    assert result.flag_ratio == 80
    assert result.score == 68
    assert result.label == "Good Match"
    assert result.tier == "blue"
    assert result.used_safety_rating is True


def test_without_rating_score_is_ratio():
    result = score_flag_ratio(RelationshipStats(green_flags=9, red_flags=1))
    assert result.score == 90
    assert result.label == "Excellent Match"
    assert result.tier == "green"


def test_negative_counts_are_clamped():
    result = score_flag_ratio(RelationshipStats(green_flags=-3, red_flags=4))
    assert result.flag_ratio == 0
    assert result.score == 0
    assert result.tier == "red"


def test_nan_rating_is_ignored():
    result = score_flag_ratio(RelationshipStats(green_flags=3, red_flags=1,
                                                average_safety_rating=float("nan")))
    assert result.score == 75
    assert result.used_safety_rating is False


def test_flag_balance_labels():
    going_well = score_flag_balance(RelationshipStats(green_flags=10, red_flags=2))
    assert going_well.health_score == 8
    assert going_well.percentage == 70.0
    assert going_well.label == "Going Well"

    assert score_flag_balance(RelationshipStats(green_flags=2, red_flags=2)).label == "Balanced"
    assert score_flag_balance(RelationshipStats(green_flags=1, red_flags=4)).label == "Mixed Signals"

    worst = score_flag_balance(RelationshipStats(green_flags=0, red_flags=30))
    assert worst.label == "Needs Attention"
    assert worst.percentage == 0.0


def test_summarize_relationships():
    relationships = [
        Relationship(id="a", name="Alex",
                     stats=RelationshipStats(green_flags=8, red_flags=2, average_safety_rating=4)),
        Relationship(id="b", name="Blake"),
        Relationship(id="c", name="Casey", stats={"greenFlags": 9, "redFlags": 1}),
    ]
    summary = summarize_relationships(relationships)

    assert [r["score"] for r in summary["relationships"]] == [68, 50, 90]
    assert summary["total_relationships"] == 3
    assert summary["healthy_relationships"] == 1
    assert summary["concerning_relationships"] == 0
    assert summary["average_score"] == pytest.approx(208 / 3)
    assert summary["healthiest"] == "Casey"
    assert summary["most_problematic"] == "Blake"


def test_summarize_ties_keep_first_and_empty_is_none():
    relationships = [Relationship(id=k, name=name) for k, name in enumerate(["Dana", "Eli"])]
    summary = summarize_relationships(relationships)
    assert summary["healthiest"] == "Dana"
    assert summary["most_problematic"] == "Dana"
    assert summarize_relationships([]) is None


def test_unusable_counts_and_rating_read_as_defaults():
    nan_green = score_flag_ratio(RelationshipStats(green_flags=float("nan"), red_flags=1))
    assert nan_green.flag_ratio == 0
    assert nan_green.score == 0

    text_rating = score_flag_ratio(RelationshipStats(green_flags="3", red_flags=1,
                                                     average_safety_rating="n/a"))
    assert text_rating.score == 75
    assert text_rating.used_safety_rating is False

    balance = score_flag_balance(RelationshipStats(green_flags="lots", red_flags=None))
    assert balance.health_score == 0
    assert balance.percentage == 50.0
    assert balance.label == "Balanced"
