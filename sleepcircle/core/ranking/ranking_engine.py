"""
Leaderboard ranking over a cohort of peer summaries.

Night Owl ranks the latest bedtime first, Early Bird the earliest wake
time first. Members without the relevant time always go to the bottom,
and ties keep their input order.
"""

import logging
from typing import List, Optional

from sleepcircle.core.models.data_models import PeerSummary, Metric, Presence, LeaderboardConfig, CohortSource
from sleepcircle.core.models.output_models import LeaderboardEntry, LeaderboardView
from sleepcircle.utils.constants import ABSENT_TIME, MISSING_TIME_PLACEHOLDER, SLEEPING_PLACEHOLDER
from sleepcircle.utils.time_arithmetic import to_minutes_since_reference_evening, to_minutes_since_midnight

logger = logging.getLogger(__name__)


class RankingEngine:
    """Pure ranking functions; holds no state between calls"""

    def metric_value(self, peer: PeerSummary, metric: Metric) -> int:
        """Comparable minute value of the member's time for the metric"""
        if metric == Metric.NIGHT_OWL:
            return to_minutes_since_reference_evening(peer.bed_time)
        return to_minutes_since_midnight(peer.wake_time)

    def _sort_key(self, metric: Metric):
        def key(peer):
            value = self.metric_value(peer, metric)
            if value == ABSENT_TIME:
                return (1, 0)
            # Night Owl is descending, Early Bird ascending
            return (0, -value if metric == Metric.NIGHT_OWL else value)
        return key

    def rank(self, cohort: List[PeerSummary], metric: Metric) -> List[PeerSummary]:
        """
        Order a cohort for a metric.

        Args:
            cohort: Peer summaries, at most one flagged as the current user
            metric: Ranking dimension

        Returns:
            list: New list in rank order; the input is left untouched
        """
        current = [p for p in cohort if p.is_current_user]
        if len(current) > 1:
            raise ValueError(f"Cohort has {len(current)} current-user entries, expected at most one")

        ranked = sorted(cohort, key=self._sort_key(metric))
        logger.debug(f"Ranked {len(ranked)} members by {metric.value}")
        return ranked

    def rank_of_current_user(self, ranked: List[PeerSummary]) -> int:
        """1-based position of the current user, or 0 if not in the list"""
        for position, peer in enumerate(ranked, start=1):
            if peer.is_current_user:
                return position
        return 0

    def display_value(self, peer: Optional[PeerSummary], metric: Metric) -> str:
        """Leaderboard cell text for a member"""
        if peer is None:
            return ""
        if metric == Metric.NIGHT_OWL:
            return peer.bed_time or MISSING_TIME_PLACEHOLDER
        if peer.status == Presence.SLEEPING:
            return SLEEPING_PLACEHOLDER
        return peer.wake_time or MISSING_TIME_PLACEHOLDER

    def build_view(self, cohort: List[PeerSummary], config: LeaderboardConfig,
                   cohort_source: Optional[CohortSource] = None) -> LeaderboardView:
        """
        Rank a cohort and package it with the current user's standing.

        Args:
            cohort: Composed cohort (see CohortComposer)
            config: Metric and cohort selection
            cohort_source: Source actually shown, if it differs from the selection

        Returns:
            LeaderboardView: Ranked entries, rank and display value
        """
        metric = config.metric
        ranked = self.rank(cohort, metric)

        entries = [
            LeaderboardEntry(rank=position, peer=peer, display_value=self.display_value(peer, metric))
            for position, peer in enumerate(ranked, start=1)
        ]
        me = next((p for p in ranked if p.is_current_user), None)

        return LeaderboardView(
            metric=metric,
            cohort_source=cohort_source or config.cohort_source,
            entries=entries,
            my_rank=self.rank_of_current_user(ranked),
            my_display_value=self.display_value(me, metric),
        )
