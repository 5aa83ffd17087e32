# sleepcircle/api/dependencies.py
import logging

from fastapi import Request

from sleepcircle.config.config_manager import ConfigManager
from sleepcircle.core.models.data_models import Metric
from sleepcircle.core.ranking.cohort_composer import CohortComposer
from sleepcircle.core.recommendation.annotator import RuleBasedAnnotator
from sleepcircle.core.repositories.cohort_repository import CohortRepository
from sleepcircle.core.repositories.record_repository import RecordRepository
from sleepcircle.core.services.leaderboard_service import LeaderboardService
from sleepcircle.core.services.sleep_service import SleepService

logger = logging.getLogger(__name__)


class AppState:
    """One in-memory session: the user's records, cohorts and selections"""

    def __init__(self, config: ConfigManager):
        self.config = config
        self.repository = RecordRepository()
        self.cohorts = CohortRepository(
            friends=config.get('cohorts.friends', []),
            global_peers=config.get('cohorts.global', []),
        )

        annotator = None
        if config.get('annotation.enabled', True):
            annotator = RuleBasedAnnotator(late_bedtime=config.get('annotation.late_bedtime', '00:30'))

        self.sleep_service = SleepService(
            self.repository,
            annotator=annotator,
            window_days=config.get('summary.window_days'),
        )
        self.leaderboard_service = LeaderboardService(
            self.sleep_service,
            CohortComposer(self.cohorts.get_friends, self.cohorts.get_global),
            default_metric=Metric(config.get('leaderboard.default_metric', 'owl')),
        )


# Dependencies
def get_state(request: Request) -> AppState:
    return request.app.state.sleepcircle


def get_sleep_service(request: Request) -> SleepService:
    return get_state(request).sleep_service


def get_leaderboard_service(request: Request) -> LeaderboardService:
    return get_state(request).leaderboard_service
