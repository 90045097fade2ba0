"""
Settings for tournament creation and standings scoring.
"""
import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = 'FIXLY_SETTINGS_FILE'


def get_default_settings():
    """Return default settings."""
    return {
        'tournament_type': 'league',
        'mode': 'community',
        'sport': 'football',
        'points': {
            'win': 3,
            'draw': 1,
            'loss': 0,
        },
    }


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_settings(path=None):
    """
    Load settings from YAML, layered over the defaults.

    Falls back to $FIXLY_SETTINGS_FILE when no path is given. A missing or
    unreadable file gives the defaults.
    """
    settings = get_default_settings()
    path = path or os.environ.get(SETTINGS_ENV_VAR)
    if not path or not os.path.exists(path):
        return settings
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f'Failed to parse {path}: {e}')
        return settings
    if not isinstance(data, dict):
        logger.warning(f'Ignoring {path}: expected a mapping at top level')
        return settings
    return _merge(settings, copy.deepcopy(data))
