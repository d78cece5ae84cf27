"""
Configuration loader for spendpivot.

Loads settings from a settings.yaml file inside a config directory.
"""

import os

import yaml

from .report import SORT_COLUMNS, default_sort_direction
from .store import default_store_path

DEFAULT_SETTINGS = {
    'year': None,
    'data_file': None,
    'currency_format': '${amount}',
    'decimal_separator': '.',
    'sort_column': 'amount',
    'sort_direction': None,
    'store_path': None,
}


def find_config_dir():
    """Find the config directory.

    Resolution order:
    1. SPENDPIVOT_CONFIG environment variable (if set and exists)
    2. ./config
    3. ./spendpivot/config

    Returns None if no config directory is found.
    """
    env_config = os.environ.get('SPENDPIVOT_CONFIG')
    if env_config:
        env_path = os.path.abspath(env_config)
        if os.path.isdir(env_path):
            return env_path

    for candidate in ('config', os.path.join('spendpivot', 'config')):
        path = os.path.abspath(candidate)
        if os.path.isdir(path):
            return path

    return None


def load_settings(config_dir, settings_file='settings.yaml'):
    """Load main settings from settings.yaml (or specified file)."""
    settings_path = os.path.join(config_dir, settings_file)

    if not os.path.exists(settings_path):
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with open(settings_path, 'r', encoding='utf-8') as f:
        settings = yaml.safe_load(f)

    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ValueError(f"{settings_file} must contain a mapping of settings")
    return settings


def apply_defaults(settings, config_dir=None):
    """Fill in defaults and validate a settings dict.

    Args:
        settings: Raw settings (e.g. from settings.yaml)
        config_dir: Config directory; data_file is resolved relative to its parent

    Returns:
        dict with all configuration values

    Raises:
        ValueError: If a setting has an invalid value
    """
    config = dict(DEFAULT_SETTINGS)
    config.update({k: v for k, v in settings.items() if v is not None})
    warnings = []

    known = set(DEFAULT_SETTINGS)
    for key in settings:
        if key not in known:
            warnings.append({
                'type': 'warning',
                'source': 'settings.yaml',
                'message': f"Unknown setting '{key}' ignored",
            })

    year = config['year']
    if year is not None:
        try:
            config['year'] = int(year)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid year: {year!r}")

    if config['decimal_separator'] not in ('.', ','):
        raise ValueError(
            f"Invalid decimal_separator: {config['decimal_separator']!r}. Use '.' or ','"
        )

    if '{amount}' not in str(config['currency_format']):
        raise ValueError("currency_format must contain an {amount} placeholder")

    if config['sort_column'] not in SORT_COLUMNS:
        raise ValueError(
            f"Invalid sort_column: {config['sort_column']!r}. "
            f"Valid options: {', '.join(SORT_COLUMNS)}"
        )
    if config['sort_direction'] is None:
        config['sort_direction'] = default_sort_direction(config['sort_column'])
    elif config['sort_direction'] not in ('asc', 'desc'):
        raise ValueError(f"Invalid sort_direction: {config['sort_direction']!r}. Use 'asc' or 'desc'")

    if config['data_file'] and config_dir:
        # Relative to the budget directory that holds config/
        budget_dir = os.path.dirname(config_dir)
        config['data_file'] = os.path.normpath(os.path.join(budget_dir, config['data_file']))

    if config['store_path']:
        config['store_path'] = os.path.expanduser(config['store_path'])
    else:
        config['store_path'] = default_store_path()

    config['_config_dir'] = config_dir
    config['_warnings'] = warnings
    return config


def load_config(config_dir=None, settings_file='settings.yaml'):
    """Load configuration from a config directory.

    With config_dir=None the built-in defaults are returned.

    Raises:
        FileNotFoundError: If the directory or settings file does not exist
        ValueError: If a setting has an invalid value
    """
    if config_dir is None:
        return apply_defaults({})

    config_dir = os.path.abspath(config_dir)
    if not os.path.isdir(config_dir):
        raise FileNotFoundError(f"Config directory not found: {config_dir}")

    settings = load_settings(config_dir, settings_file)
    return apply_defaults(settings, config_dir)
