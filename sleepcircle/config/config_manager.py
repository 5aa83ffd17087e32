# sleepcircle/config/config_manager.py
import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'SLEEPCIRCLE_CONFIG'

DEFAULT_CONFIG = {
    'logging': {
        'level': 'INFO',
        'file': None,
    },
    'summary': {
        'window_days': 7,
    },
    'leaderboard': {
        'default_metric': 'owl',
    },
    'annotation': {
        'enabled': True,
        'late_bedtime': '00:30',
    },
    'api': {
        'host': '0.0.0.0',
        'port': 8000,
    },
    'cohorts': {
        'friends': [],
        'global': [],
    },
}


def _merge(base, override):
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Central configuration manager"""

    def __init__(self, config_path=None):
        self.config_path = config_path or os.environ.get(CONFIG_ENV_VAR) or 'config/config.yaml'
        self.config = _merge(DEFAULT_CONFIG, self._load_config())

    def _load_config(self):
        """Load configuration from file"""
        if not os.path.exists(self.config_path):
            logger.warning(f"Config file {self.config_path} not found, using defaults")
            return {}
        try:
            with open(self.config_path, 'r') as file:
                loaded = yaml.safe_load(file)
        except yaml.YAMLError as e:
            logger.error(f"Error loading configuration from {self.config_path}: {str(e)}")
            raise
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration in {self.config_path} must be a mapping")
        logger.info(f"Loaded configuration from {self.config_path}")
        return loaded

    def get(self, key, default=None):
        """Get configuration value"""
        # Support nested keys with dot notation
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
