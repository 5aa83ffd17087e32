"""
Ranking Engine Tests

Night Owl and Early Bird ordering, the missing-data rule, stability and
the current user's rank and display value.
"""

import pytest

from sleepcircle.core.models.data_models import Metric, Presence, LeaderboardConfig, CohortSource
from sleepcircle.core.ranking.ranking_engine import RankingEngine

from conftest import make_peer


@pytest.fixture
def engine():
    return RankingEngine()


def ids(peers):
    return [p.id for p in peers]


class TestNightOwl:

    def test_later_bedtime_ranks_higher(self, engine):
        cohort = [make_peer("a", "22:00"), make_peer("b", "01:30"), make_peer("c", "23:45")]
        assert ids(engine.rank(cohort, Metric.NIGHT_OWL)) == ["b", "c", "a"]

    def test_after_midnight_beats_before_midnight(self, engine):
        """00:45 rolls over to 24:45 and so is later than 23:10."""
        cohort = [make_peer("peer", "23:10"), make_peer("me", "00:45", is_current_user=True)]
        ranked = engine.rank(cohort, Metric.NIGHT_OWL)
        assert ids(ranked) == ["me", "peer"]
        assert engine.rank_of_current_user(ranked) == 1

    def test_missing_bedtime_goes_last(self, engine):
        cohort = [make_peer("none", None, "06:00", score=99), make_peer("early", "21:00")]
        assert ids(engine.rank(cohort, Metric.NIGHT_OWL)) == ["early", "none"]


class TestEarlyBird:

    def test_earlier_wake_ranks_higher(self, engine):
        cohort = [make_peer("a", wake_time="08:30"), make_peer("b", wake_time="05:45"), make_peer("c", wake_time="06:30")]
        assert ids(engine.rank(cohort, Metric.EARLY_BIRD)) == ["b", "c", "a"]

    def test_missing_wake_goes_last(self, engine):
        cohort = [
            make_peer("sleeping", "23:00", status=Presence.SLEEPING),
            make_peer("late", "23:00", "11:00"),
        ]
        assert ids(engine.rank(cohort, Metric.EARLY_BIRD)) == ["late", "sleeping"]


class TestMissingDataAndStability:

    @pytest.mark.parametrize("metric", [Metric.NIGHT_OWL, Metric.EARLY_BIRD])
    def test_absent_entries_sort_after_present_ones(self, engine, metric):
        cohort = [
            make_peer("x1"),
            make_peer("p1", "22:00", "09:00"),
            make_peer("x2", score=100),
            make_peer("p2", "02:00", "05:00"),
            make_peer("x3"),
        ]
        ranked = ids(engine.rank(cohort, metric))
        assert ranked[2:] == ["x1", "x2", "x3"]
        assert set(ranked[:2]) == {"p1", "p2"}

    def test_ties_keep_input_order(self, engine):
        cohort = [make_peer("a", "23:00"), make_peer("b", "23:00"), make_peer("c", "23:00")]
        assert ids(engine.rank(cohort, Metric.NIGHT_OWL)) == ["a", "b", "c"]

    @pytest.mark.parametrize("metric", [Metric.NIGHT_OWL, Metric.EARLY_BIRD])
    def test_repeated_ranking_is_identical(self, engine, metric):
        cohort = [make_peer(f"p{i}", bed, wake) for i, (bed, wake) in enumerate([
            ("23:00", "07:00"), (None, None), ("01:00", "07:00"), ("23:00", None), (None, "06:00"),
        ])]
        assert ids(engine.rank(cohort, metric)) == ids(engine.rank(cohort, metric))

    def test_input_is_not_reordered(self, engine):
        cohort = [make_peer("a", "22:00"), make_peer("b", "01:00")]
        engine.rank(cohort, Metric.NIGHT_OWL)
        assert ids(cohort) == ["a", "b"]

    def test_two_current_users_are_rejected(self, engine):
        cohort = [make_peer("a", is_current_user=True), make_peer("b", is_current_user=True)]
        with pytest.raises(ValueError):
            engine.rank(cohort, Metric.NIGHT_OWL)


class TestDisplay:

    def test_rank_is_zero_without_current_user(self, engine):
        ranked = engine.rank([make_peer("a", "23:00")], Metric.NIGHT_OWL)
        assert engine.rank_of_current_user(ranked) == 0

    def test_owl_shows_bedtime_or_placeholder(self, engine):
        assert engine.display_value(make_peer("a", "23:10"), Metric.NIGHT_OWL) == "23:10"
        assert engine.display_value(make_peer("a"), Metric.NIGHT_OWL) == "--:--"

    def test_early_shows_sleeping_placeholder(self, engine):
        sleeping = make_peer("a", "23:10", status=Presence.SLEEPING)
        assert engine.display_value(sleeping, Metric.EARLY_BIRD) == "Sleeping"
        assert engine.display_value(make_peer("b", wake_time="06:15"), Metric.EARLY_BIRD) == "06:15"
        assert engine.display_value(make_peer("c"), Metric.EARLY_BIRD) == "--:--"

    def test_build_view(self, engine):
        cohort = [make_peer("a", "22:00"), make_peer("me", "23:30", "07:15", is_current_user=True)]
        config = LeaderboardConfig(metric=Metric.NIGHT_OWL, cohort_source=CohortSource.FRIENDS, is_authenticated=True)

        view = engine.build_view(cohort, config)

        assert [e.rank for e in view.entries] == [1, 2]
        assert view.entries[0].peer.id == "me"
        assert view.my_rank == 1
        assert view.my_display_value == "23:30"
        assert view.cohort_source == CohortSource.FRIENDS

    def test_build_view_without_current_user(self, engine):
        config = LeaderboardConfig(metric=Metric.EARLY_BIRD, cohort_source=CohortSource.GLOBAL)
        view = engine.build_view([make_peer("a", wake_time="06:00")], config)
        assert view.my_rank == 0
        assert view.my_display_value == ""
