from datetime import datetime, timedelta, timezone

import pytest

from boundaryspace.records.schema import Baseline, Interaction, Relationship


NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def baseline():
    return Baseline(
        communication_style="direct",
        conflict_resolution="talk it through",
        personal_space_needs="medium",
        non_negotiable_boundaries=["poor communication", "name calling"],
        flexible_boundaries=["weekend plans"],
        triggers=["raised voices"],
    )


@pytest.fixture
def make_interaction():
    def _make(hours_ago=None, **kwargs):
        if hours_ago is not None:
            kwargs["timestamp"] = NOW - timedelta(hours=hours_ago)
        kwargs.setdefault("relationship_id", "r1")
        return Interaction(**kwargs)

    return _make


@pytest.fixture
def good_interaction(make_interaction):
    return make_interaction(
        communication_style_respected=True,
        boundaries_respected=True,
        triggers_avoided=True,
        energy_before=5,
        energy_after=8,
        self_worth_before=5,
        self_worth_after=7,
    )


@pytest.fixture
def relationship():
    return Relationship(id="r1", name="Alex", relationship_type="romantic")
