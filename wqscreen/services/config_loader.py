# wqscreen/services/config_loader.py
import os
import logging
from configparser import ConfigParser
from dataclasses import replace
from typing import Dict, Any

from ..analysis.models import (
    ConfigError,
    HardnessSettings,
    PfasSettings,
    DEFAULT_HARDNESS_SETTINGS,
    DEFAULT_PFAS_SETTINGS,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'config.ini'


def _config_path(filename: str) -> str:
    """Absolute paths are used as-is; bare names resolve to <repo>/config/."""
    if os.path.isabs(filename):
        return filename
    module_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(module_path, '..', '..', 'config', filename)


def _read_parser(filename: str) -> ConfigParser:
    config_path = _config_path(filename)
    if not os.path.exists(config_path):
        logger.error(f"Configuration file not found at: {config_path}")
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")

    parser = ConfigParser()
    parser.read(config_path)
    return parser


def load_config(filename: str = DEFAULT_CONFIG_FILE, section: str = 'hardness') -> Dict[str, Any]:
    """
    Loads a specific section from the config.ini file.

    Args:
        filename (str): Config file name in the config/ directory, or an absolute path.
        section (str): The [section] in the INI file to load.

    Returns:
        Dict[str, Any]: A dictionary of the raw string settings.

    Raises:
        FileNotFoundError: If the config file cannot be found.
        ConfigError: If the specified section is not found in the file.
    """
    parser = _read_parser(filename)
    if not parser.has_section(section):
        logger.error(f"Section '{section}' not found in the {_config_path(filename)} file")
        raise ConfigError(f"Section '{section}' not found in the {_config_path(filename)} file")
    return dict(parser.items(section))


def load_hardness_settings(filename: str = DEFAULT_CONFIG_FILE) -> HardnessSettings:
    """
    Loads the [hardness] section into HardnessSettings.

    Missing options keep their defaults; an invalid strict_criteria value
    is logged and ignored.
    """
    parser = _read_parser(filename)
    kwargs: Dict[str, Any] = {}

    if parser.has_section('hardness'):
        for key in ('sample_data_path', 'criteria_path', 'output_path'):
            value = parser.get('hardness', key, fallback='').strip()
            if value:
                kwargs[key] = value
        if parser.has_option('hardness', 'strict_criteria'):
            try:
                kwargs['strict_criteria'] = parser.getboolean('hardness', 'strict_criteria')
            except ValueError as e:
                logger.warning(f"Invalid boolean for 'strict_criteria': {e}. Using default.")
    else:
        logger.warning(f"No [hardness] section in {filename}. Using defaults.")

    settings = replace(DEFAULT_HARDNESS_SETTINGS, **kwargs)
    logger.debug(f"Hardness settings: {settings}")
    return settings


def load_pfas_settings(filename: str = DEFAULT_CONFIG_FILE) -> PfasSettings:
    """
    Loads the [pfas] section into PfasSettings.

    'seed' may be blank (unseeded); 'gage_locations' is a comma-separated list.
    """
    parser = _read_parser(filename)
    kwargs: Dict[str, Any] = {}

    if parser.has_section('pfas'):
        for key in ('alluvial_path', 'gage_path', 'short_name_path', 'output_path', 'palette'):
            value = parser.get('pfas', key, fallback='').strip()
            if value:
                kwargs[key] = value

        seed = parser.get('pfas', 'seed', fallback='').strip()
        if seed:
            try:
                kwargs['seed'] = int(seed)
            except ValueError:
                logger.warning(f"Invalid integer value for 'seed': {seed}. Using None.")

        locations = parser.get('pfas', 'gage_locations', fallback='').strip()
        if locations:
            kwargs['gage_locations'] = tuple(loc.strip() for loc in locations.split(',') if loc.strip())
    else:
        logger.warning(f"No [pfas] section in {filename}. Using defaults.")

    settings = replace(DEFAULT_PFAS_SETTINGS, **kwargs)
    logger.debug(f"PFAS settings: {settings}")
    return settings
