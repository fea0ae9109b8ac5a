"""JSON configuration for the clean-pass command line tool."""

import json
import os
from pathlib import Path

from pass_cleaner.encoder import OUTPUT_FILENAME
from pass_cleaner.exceptions import ConfigError

MODES = ('interactive', 'summary')

DEFAULT_CONFIG = {
    'mode': 'interactive',
    'verbose': False,
    'output': OUTPUT_FILENAME,
    'show_passwords': False,
    'drop_deleted': False,
}


def config_locations(config_path=None):
    """Candidate config files, most specific first."""
    return [
        config_path,
        os.path.expanduser('~/.clean_pass_config.json'),
        './clean_pass_config.json',
        './.clean_pass.json',
    ]


def _read(config_file):
    with open(config_file, 'r', encoding='utf-8') as f:
        user_config = json.load(f)
    if not isinstance(user_config, dict):
        raise ValueError("top level must be a JSON object")
    user_config = {k: v for k, v in user_config.items() if not k.startswith('_')}
    config = {**DEFAULT_CONFIG, **user_config}
    if config['mode'] not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {config['mode']!r}")
    return config


def load_config(config_path=None, logger=None):
    """Load configuration merged over DEFAULT_CONFIG.

    Returns (config, path) where path is None when defaults are used. A file
    named explicitly by config_path must load; files found by searching are
    skipped with a warning when broken.
    """
    if config_path and not Path(config_path).exists():
        raise ConfigError(f"Config file not found: {config_path}")

    for config_file in config_locations(config_path):
        if not config_file or not Path(config_file).exists():
            continue
        try:
            config = _read(config_file)
        except (ValueError, OSError) as e:
            if config_file == config_path:
                raise ConfigError(f"Could not load config file {config_file}: {e}") from e
            if logger:
                logger.warning(f"Could not load config file {config_file}: {e}")
            continue
        if logger:
            logger.debug(f"Loaded configuration from: {config_file}")
        return config, config_file

    return dict(DEFAULT_CONFIG), None


def save_config_template(config_path=None):
    """Write a commented configuration template and return its path."""
    if not config_path:
        config_path = os.path.expanduser('~/.clean_pass_config.json')

    template_config = {
        "_comment": "Configuration file for clean-pass. Keys starting with '_' are ignored.",
        **DEFAULT_CONFIG,
        "_settings_info": {
            "mode": "Options: interactive, summary",
            "verbose": "Boolean: true for detailed logging",
            "output": "String: path of the cleaned CSV",
            "show_passwords": "Boolean: true to show passwords in interactive mode (use with caution)",
            "drop_deleted": "Boolean: true to leave entries marked delete out of the export",
        },
    }

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(template_config, f, indent=2)
    return config_path
