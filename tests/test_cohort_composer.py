"""
Cohort Composer Tests

Which cohort is shown, and when the current user is part of it.
"""

import pytest

from sleepcircle.core.models.data_models import LeaderboardConfig, CohortSource, Presence, RecordStatus
from sleepcircle.core.ranking.cohort_composer import CohortComposer

from conftest import make_peer, make_record


FRIENDS = [make_peer("f-0", "23:00", "07:00"), make_peer("f-1", "00:30", "08:00")]
GLOBAL = [make_peer("g-0", "22:00", "06:00"), make_peer("g-1", "02:00", "09:00"), make_peer("g-2", "23:30")]


@pytest.fixture
def composer():
    return CohortComposer(lambda: list(FRIENDS), lambda: list(GLOBAL))


@pytest.fixture
def me(identity):
    return CohortComposer.self_summary(identity, make_record("2024-03-10"))


class TestActiveSource:

    def test_anonymous_is_forced_to_global(self):
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=False)
        assert CohortComposer.active_source(config) == CohortSource.GLOBAL

    @pytest.mark.parametrize("source", [CohortSource.FRIENDS, CohortSource.GLOBAL])
    def test_signed_in_uses_selection(self, source):
        config = LeaderboardConfig(cohort_source=source, is_authenticated=True)
        assert CohortComposer.active_source(config) == source

    def test_login_defaults_to_friends(self):
        config = CohortComposer.on_login(LeaderboardConfig(cohort_source=CohortSource.GLOBAL))
        assert config.is_authenticated
        assert config.cohort_source == CohortSource.FRIENDS

    def test_logout_forces_global(self):
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=True)
        config = CohortComposer.on_logout(config)
        assert not config.is_authenticated
        assert config.cohort_source == CohortSource.GLOBAL


class TestCompose:

    def test_anonymous_gets_global_without_self(self, composer, me):
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=False)

        cohort = composer.compose(config, me)

        assert [p.id for p in cohort] == ["g-0", "g-1", "g-2"]
        assert not any(p.is_current_user for p in cohort)

    def test_signed_in_friends_includes_self(self, composer, me):
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=True)

        cohort = composer.compose(config, me)

        assert [p.id for p in cohort] == ["f-0", "f-1", "user-1"]
        assert [p.is_current_user for p in cohort] == [False, False, True]

    def test_signed_in_global_includes_self(self, composer, me):
        config = LeaderboardConfig(cohort_source=CohortSource.GLOBAL, is_authenticated=True)
        cohort = composer.compose(config, me)
        assert len(cohort) == 4
        assert cohort[-1].is_current_user

    def test_supplied_rows_lose_current_user_flag(self, me):
        composer = CohortComposer(lambda: [make_peer("f-0", "23:00", is_current_user=True)], lambda: [])
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=True)
        cohort = composer.compose(config, me)
        assert sum(p.is_current_user for p in cohort) == 1

    def test_signed_in_without_records(self, composer, identity):
        config = LeaderboardConfig(cohort_source=CohortSource.FRIENDS, is_authenticated=True)
        cohort = composer.compose(config, CohortComposer.self_summary(identity, None))
        assert [p.id for p in cohort] == ["f-0", "f-1"]


class TestSelfSummary:

    def test_complete_record_projection(self, identity):
        summary = CohortComposer.self_summary(identity, make_record("2024-03-10", quality="Good", duration=7.0))

        assert summary.id == identity.id
        assert summary.name == identity.username
        assert summary.status == Presence.AWAKE
        assert summary.sleep_score == 85
        assert summary.last_sleep_duration == 7.0
        assert summary.bed_time == "23:00"
        assert summary.wake_time == "07:00"
        assert summary.is_current_user

    def test_open_record_is_sleeping(self, identity):
        summary = CohortComposer.self_summary(
            identity, make_record("2024-03-10", status=RecordStatus.INCOMPLETE, bed_time="00:20")
        )
        assert summary.status == Presence.SLEEPING
        assert summary.sleep_score == 0
        assert summary.wake_time is None

    def test_no_identity(self):
        assert CohortComposer.self_summary(None, make_record("2024-03-10")) is None
