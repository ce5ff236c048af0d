"""
Configuration Management Module

This module handles loading and managing application configuration settings,
including environment variables and default values.

Required Modules:
- os: For environment variable access
- dotenv: For loading .env files
"""

import os
from dotenv import load_dotenv
from pathlib import Path

from constants import AnalyticsConstants, PlanningConstants

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def _int_setting(config: dict, section: str, key: str, default: int, minimum: int = 1) -> list[str]:
    """Coerce config[section][key] to an int >= minimum, falling back to default."""
    try:
        value = int(config[section][key])
        if value < minimum:
            raise ValueError
        config[section][key] = value
        return []
    except (TypeError, ValueError):
        config[section][key] = default
        return [f"Invalid {key.upper()} value. Using default: {default}"]


def _validate_env_vars(config: dict) -> list[str]:
    """Validate environment variables and return list of warnings."""
    warnings = []

    warnings.extend(_int_setting(config, 'planning', 'default_daily_goal',
                                 PlanningConstants.DEFAULT_DAILY_GOAL))
    warnings.extend(_int_setting(config, 'planning', 'max_daily_goal',
                                 PlanningConstants.MAX_DAILY_GOAL))

    planning = config['planning']
    if planning['default_daily_goal'] > planning['max_daily_goal']:
        warnings.append("DEFAULT_DAILY_GOAL is greater than MAX_DAILY_GOAL. Raising the maximum.")
        planning['max_daily_goal'] = planning['default_daily_goal']

    analytics = config['analytics']
    if analytics['default_timeframe'] not in AnalyticsConstants.TIMEFRAMES:
        warnings.append(
            f"Invalid ANALYTICS_TIMEFRAME '{analytics['default_timeframe']}'. "
            f"Using default: {AnalyticsConstants.DEFAULT_TIMEFRAME}"
        )
        analytics['default_timeframe'] = AnalyticsConstants.DEFAULT_TIMEFRAME

    warnings.extend(_int_setting(config, 'analytics', 'top_companies_limit',
                                 AnalyticsConstants.TOP_COMPANIES_LIMIT))
    warnings.extend(_int_setting(config, 'analytics', 'recent_limit',
                                 AnalyticsConstants.RECENT_APPLICATIONS_LIMIT))

    return warnings


def _setup_data_directories(config: dict) -> list[str]:
    """Setup required data directories and return any warnings."""
    warnings = []
    required_dirs = [
        config['system']['data_dir'],
        Path(config['system']['data_dir']) / 'logs',
        config['storage']['records_path'],
        config['storage']['exports_path'],
    ]

    for dir_path in required_dirs:
        path = Path(dir_path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            warnings.append(f"Failed to create directory '{dir_path}': {e}")

    return warnings


def _validate_critical_settings(config: dict) -> None:
    """Ensure critical settings are properly set."""
    system = config.get('system', {})
    if not system.get('data_dir'):
        print("[Settings] WARNING: No DATA_DIR specified, using './data'")
        system['data_dir'] = './data'

    if system.get('log_level') not in VALID_LOG_LEVELS:
        print(f"[Settings] WARNING: Invalid LOG_LEVEL '{system.get('log_level')}', using 'INFO'")
        system['log_level'] = 'INFO'

    storage = config.setdefault('storage', {})
    if not storage.get('records_path'):
        storage['records_path'] = str(Path(system['data_dir']) / 'records')
    if not storage.get('exports_path'):
        storage['exports_path'] = str(Path(system['data_dir']) / 'exports')


def load_settings() -> dict:
    """
    Load and validate all configuration settings.

    Note: The identity section is empty unless TRACKER_USER_ID is set, in
    which case the shell runs as that user.
    """
    load_dotenv()  # Load variables from .env

    warnings = []

    base_data_dir = os.getenv('DATA_DIR', './data')

    config = {
        'system': {
            'data_dir': base_data_dir,
            'log_level': os.getenv('LOG_LEVEL', 'INFO').upper(),
            'debug_mode': os.getenv('DEBUG_MODE', 'False').lower() == 'true',
        },
        'storage': {
            'records_path': os.getenv('RECORDS_PATH', ''),
            'exports_path': os.getenv('EXPORTS_PATH', ''),
        },
        'planning': {
            'default_daily_goal': os.getenv('DEFAULT_DAILY_GOAL', str(PlanningConstants.DEFAULT_DAILY_GOAL)),
            'max_daily_goal': os.getenv('MAX_DAILY_GOAL', str(PlanningConstants.MAX_DAILY_GOAL)),
        },
        'analytics': {
            'default_timeframe': os.getenv('ANALYTICS_TIMEFRAME', AnalyticsConstants.DEFAULT_TIMEFRAME).lower(),
            'top_companies_limit': os.getenv('TOP_COMPANIES_LIMIT', str(AnalyticsConstants.TOP_COMPANIES_LIMIT)),
            'recent_limit': os.getenv('RECENT_APPLICATIONS_LIMIT', str(AnalyticsConstants.RECENT_APPLICATIONS_LIMIT)),
        },
        'identity': {
            'user_id': os.getenv('TRACKER_USER_ID', '').strip(),
            'display_name': os.getenv('TRACKER_USER_NAME', '').strip(),
            'email': os.getenv('TRACKER_USER_EMAIL', '').strip(),
        },
    }

    # Add validation for critical settings
    _validate_critical_settings(config)

    # Validate environment variables
    warnings.extend(_validate_env_vars(config))

    # Setup data directories AFTER config is created
    warnings.extend(_setup_data_directories(config))

    # Print any warnings
    for warning in warnings:
        print(f"[Settings] WARNING: {warning}")

    return config
