from datetime import timedelta

from boundaryspace.notifications import derive_deal_breaker_alerts
from boundaryspace.notifications.deal_breakers import deal_breaker_severity


def test_recent_deal_breakers_raise_alerts(baseline, make_interaction, now):
    interaction = make_interaction(
        id="i1",
        hours_ago=5 * 24,
        deal_breakers_crossed=["dismissive communication", "name calling"],
    )
    alerts = derive_deal_breaker_alerts([interaction], baseline, now)

    assert [a.alert_id for a in alerts] == ["i1-dismissive communication", "i1-name calling"]

    dismissive, name_calling = alerts
    assert dismissive.severity == "medium"
    assert [a.type for a in dismissive.suggested_actions] == ["communication", "evaluation"]
    assert name_calling.severity == "high"
    assert [a.type for a in name_calling.suggested_actions] == ["evaluation"]
    assert name_calling.relationship_id == "r1"


def test_window_excludes_old_and_undated(baseline, make_interaction, now):
    interactions = [
        make_interaction(id="old", hours_ago=31 * 24, deal_breakers_crossed=["lying"]),
        make_interaction(id="edge", hours_ago=30 * 24, deal_breakers_crossed=["lying"]),
        make_interaction(id="undated", deal_breakers_crossed=["lying"]),
        make_interaction(id="fresh", hours_ago=30 * 24 - 1, deal_breakers_crossed=["lying"]),
    ]
    alerts = derive_deal_breaker_alerts(interactions, baseline, now)
    assert [a.interaction_id for a in alerts] == ["fresh"]

    wider = derive_deal_breaker_alerts(interactions, baseline, now - timedelta(days=2), window_days=60)
    assert {a.interaction_id for a in wider} == {"old", "edge", "fresh"}


def test_dismissed_alerts_are_skipped(baseline, make_interaction, now):
    interaction = make_interaction(id=7, hours_ago=1,
                                   deal_breakers_crossed=["boundary pushing", "lying"])
    alerts = derive_deal_breaker_alerts([interaction], baseline, now, dismissed=["7-lying"])

    assert [a.alert_id for a in alerts] == ["7-boundary pushing"]
    assert [a.type for a in alerts[0].suggested_actions] == ["boundary", "evaluation"]


def test_no_clock_no_alerts(baseline, make_interaction):
    interaction = make_interaction(id="i1", hours_ago=1, deal_breakers_crossed=["lying"])
    assert derive_deal_breaker_alerts([interaction], baseline, None) == []


def test_severity_without_baseline():
    assert deal_breaker_severity("name calling", None) == "medium"
