# sleepcircle/core/services/leaderboard_service.py
import logging
from datetime import datetime
from typing import Optional

from sleepcircle.core.models.data_models import LeaderboardConfig, Metric, CohortSource
from sleepcircle.core.models.output_models import LeaderboardView
from sleepcircle.core.ranking.cohort_composer import CohortComposer
from sleepcircle.core.ranking.ranking_engine import RankingEngine
from sleepcircle.core.services.sleep_service import SleepService

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Service layer for leaderboard selection and ranking"""

    def __init__(self, sleep_service: SleepService, composer: CohortComposer,
                 engine: Optional[RankingEngine] = None, default_metric: Metric = Metric.NIGHT_OWL):
        self.sleep_service = sleep_service
        self.composer = composer
        self.engine = engine or RankingEngine()
        self.config = LeaderboardConfig(metric=default_metric, cohort_source=CohortSource.GLOBAL)
        self.sync_authentication()

    def sync_authentication(self) -> LeaderboardConfig:
        """Follow sign-in and sign-out of the sleep service's user"""
        authenticated = self.sleep_service.is_authenticated
        if authenticated and not self.config.is_authenticated:
            self.config = self.composer.on_login(self.config)
        elif not authenticated and self.config.is_authenticated:
            self.config = self.composer.on_logout(self.config)
        elif not authenticated:
            self.config = self.config.model_copy(update={'cohort_source': CohortSource.GLOBAL})
        return self.config

    def select_metric(self, metric: Metric) -> LeaderboardConfig:
        self.config = self.config.model_copy(update={'metric': Metric(metric)})
        return self.config

    def select_cohort_source(self, source: CohortSource) -> LeaderboardConfig:
        """Switch between friends and global; anonymous callers stay on global"""
        self.sync_authentication()
        source = CohortSource(source)
        if not self.config.is_authenticated and source != CohortSource.GLOBAL:
            logger.debug(f"Ignoring switch to {source.value}: not signed in")
            return self.config
        self.config = self.config.model_copy(update={'cohort_source': source})
        return self.config

    def view(self, now: Optional[datetime] = None) -> LeaderboardView:
        """Rank the active cohort with the current selection"""
        config = self.sync_authentication()
        summary = self.composer.self_summary(
            self.sleep_service.identity,
            self.sleep_service.latest_record(now),
        )
        cohort = self.composer.compose(config, summary)
        return self.engine.build_view(cohort, config, self.composer.active_source(config))
