# sleepcircle/core/repositories/cohort_repository.py
import logging
from typing import Dict, List, Optional

from sleepcircle.core.models.data_models import PeerSummary

logger = logging.getLogger(__name__)


class CohortRepository:
    """Fixed friends and global peer lists, e.g. loaded from configuration"""

    def __init__(self, friends: Optional[List[Dict]] = None, global_peers: Optional[List[Dict]] = None):
        self._friends = [self._to_peer(p) for p in friends or []]
        self._global = [self._to_peer(p) for p in global_peers or []]
        logger.info(f"Loaded cohorts: {len(self._friends)} friends, {len(self._global)} global")

    @staticmethod
    def _to_peer(peer):
        if isinstance(peer, PeerSummary):
            return peer
        return PeerSummary(**peer)

    def get_friends(self) -> List[PeerSummary]:
        return list(self._friends)

    def get_global(self) -> List[PeerSummary]:
        return list(self._global)

    def set_friends(self, peers: List[Dict]):
        self._friends = [self._to_peer(p) for p in peers]

    def set_global(self, peers: List[Dict]):
        self._global = [self._to_peer(p) for p in peers]
