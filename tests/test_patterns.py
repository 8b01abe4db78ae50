from boundaryspace.notifications import derive_pattern_warnings
from boundaryspace.notifications.patterns import detect_energy_drain, recent_interactions


def drained(make_interaction, count, hours_ago=None, before=9, after=4):
    return [
        make_interaction(hours_ago=hours_ago, energy_before=before, energy_after=after)
        for _ in range(count)
    ]


def test_energy_drain_fires_above_seventy_percent(relationship, make_interaction, good_interaction):
    interactions = drained(make_interaction, 3) + [good_interaction]
    warnings = derive_pattern_warnings(relationship, interactions)

    assert [w.id for w in warnings] == ["energy-drain"]
    drain = warnings[0]
    assert drain.severity == "high"
    assert drain.type == "pattern"
    assert drain.relationship_id == "r1"
    assert "3 of 4" in drain.description
    assert drain.to_dict()["confidence"] == 80


def test_exactly_seventy_percent_does_not_fire(relationship, make_interaction):
    interactions = drained(make_interaction, 7, after=5) + drained(make_interaction, 3, before=5, after=5)
    assert detect_energy_drain(interactions) is None
    assert derive_pattern_warnings(relationship, interactions) == []


def test_slow_recovery(relationship, make_interaction):
    interactions = [make_interaction(energy_after=level) for level in (3, 2, 6)]
    warnings = derive_pattern_warnings(relationship, interactions)

    assert [w.id for w in warnings] == ["recovery-concern"]
    assert warnings[0].severity == "medium"
    assert warnings[0].type == "recovery"


def test_missing_after_levels_drain_but_do_not_count_as_low(relationship, make_interaction):
    interactions = [make_interaction(energy_before=9) for _ in range(3)]
    assert [w.id for w in derive_pattern_warnings(relationship, interactions)] == ["energy-drain"]


def test_unusable_levels_do_not_crash(relationship, make_interaction):
    interactions = [
        make_interaction(energy_before="high", energy_after=float("nan")),
        make_interaction(energy_before=None, energy_after="low"),
        make_interaction(energy_before=[9], energy_after=2),
    ]
    assert derive_pattern_warnings(relationship, interactions) == []


def test_needs_three_interactions(relationship, make_interaction):
    assert derive_pattern_warnings(relationship, drained(make_interaction, 2, after=1)) == []
    assert derive_pattern_warnings(relationship, []) == []


def test_only_recent_interactions_count(relationship, make_interaction, now):
    old = drained(make_interaction, 3, hours_ago=40 * 24)
    fresh = make_interaction(hours_ago=1, energy_before=5, energy_after=6)
    interactions = old + [fresh]

    assert recent_interactions(interactions, now) == [fresh]
    assert derive_pattern_warnings(relationship, interactions, now=now) == []
    assert [w.id for w in derive_pattern_warnings(relationship, interactions)] == ["energy-drain"]
    assert [w.id for w in derive_pattern_warnings(relationship, interactions, now=now.isoformat())] == []


def test_dismissed_warnings_are_dropped(relationship, make_interaction):
    interactions = drained(make_interaction, 3, after=2)
    ids = [w.id for w in derive_pattern_warnings(relationship, interactions)]
    assert ids == ["energy-drain", "recovery-concern"]

    kept = derive_pattern_warnings(relationship, interactions, dismissed=["energy-drain"])
    assert [w.id for w in kept] == ["recovery-concern"]
