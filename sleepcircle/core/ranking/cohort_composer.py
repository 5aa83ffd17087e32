"""
Assembles the cohort a leaderboard is ranked over.

Signed-in users see the selected source (friends or global) with
themselves added; anonymous callers only ever see the global cohort.
"""

import logging
from typing import Callable, List, Optional

from sleepcircle.core.models.data_models import (
    PeerSummary, SleepRecord, UserIdentity, LeaderboardConfig, CohortSource
)
from sleepcircle.core.scoring.sleep_score import project_score, project_presence

logger = logging.getLogger(__name__)

CohortSupplier = Callable[[], List[PeerSummary]]


class CohortComposer:
    """Merges the friends and global sources with the current user's summary"""

    def __init__(self, friends_source: CohortSupplier, global_source: CohortSupplier):
        self.friends_source = friends_source
        self.global_source = global_source

    @staticmethod
    def active_source(config: LeaderboardConfig) -> CohortSource:
        """The source actually shown. Anonymous callers are pinned to global."""
        if not config.is_authenticated:
            return CohortSource.GLOBAL
        return config.cohort_source

    @staticmethod
    def self_summary(identity: Optional[UserIdentity],
                     latest_record: Optional[SleepRecord]) -> Optional[PeerSummary]:
        """Project the caller's latest record into a leaderboard row"""
        if identity is None or latest_record is None:
            return None
        return PeerSummary(
            id=identity.id,
            name=identity.username,
            avatar_color=identity.avatar_color,
            status=project_presence(latest_record),
            sleep_score=project_score(latest_record),
            last_sleep_duration=latest_record.duration,
            bed_time=latest_record.bed_time,
            wake_time=latest_record.wake_time,
            is_current_user=True,
        )

    def compose(self, config: LeaderboardConfig,
                self_summary: Optional[PeerSummary] = None) -> List[PeerSummary]:
        """
        Build the active cohort.

        Args:
            config: Cohort selection and authentication state
            self_summary: The caller's own row, if any

        Returns:
            list: Peers of the active source, plus the caller when eligible
        """
        source = self.active_source(config)
        supplier = self.friends_source if source == CohortSource.FRIENDS else self.global_source

        # Supplied rows never carry the current-user flag
        cohort = [
            peer.model_copy(update={'is_current_user': False}) if peer.is_current_user else peer
            for peer in supplier()
        ]

        if config.is_authenticated and self_summary is not None:
            cohort.append(self_summary.model_copy(update={'is_current_user': True}))

        logger.debug(f"Composed {source.value} cohort of {len(cohort)} members")
        return cohort

    @staticmethod
    def on_login(config: LeaderboardConfig) -> LeaderboardConfig:
        """Signing in switches the leaderboard to friends"""
        return config.model_copy(update={'is_authenticated': True, 'cohort_source': CohortSource.FRIENDS})

    @staticmethod
    def on_logout(config: LeaderboardConfig) -> LeaderboardConfig:
        """Signing out forces the global cohort"""
        return config.model_copy(update={'is_authenticated': False, 'cohort_source': CohortSource.GLOBAL})
