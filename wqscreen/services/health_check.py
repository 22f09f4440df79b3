import os
import json
import logging
from dataclasses import asdict

from .config_loader import load_hardness_settings, load_pfas_settings, DEFAULT_CONFIG_FILE

logger = logging.getLogger(__name__)

def _format_settings(settings) -> str:
    """Returns settings as a pretty-printed JSON string."""
    return json.dumps(asdict(settings), indent=2, default=str)

def _check_inputs(label: str, paths: dict, base_dir: str) -> bool:
    ok = True
    for key, path in paths.items():
        full_path = path if os.path.isabs(path) else os.path.join(base_dir, path)
        if os.path.isfile(full_path):
            logger.info(f"✅ [{label}] {key}: {full_path}")
        else:
            logger.error(f"❌ [{label}] {key}: not found at {full_path}")
            ok = False
    return ok

def check_configurations(config_file: str = DEFAULT_CONFIG_FILE, base_dir: str = ".") -> bool:
    """
    Loads both job configurations, logs them, and checks that every input
    file exists. Returns True if all checks passed, False otherwise.
    """
    all_ok = True

    try:
        logger.info("--- [hardness] Configuration ---")
        hardness = load_hardness_settings(config_file)
        logger.info(_format_settings(hardness))
        all_ok &= _check_inputs("hardness", {
            'sample_data_path': hardness.sample_data_path,
            'criteria_path': hardness.criteria_path,
        }, base_dir)
    except Exception as e:
        logger.error(f"Failed to load [hardness] config: {e}", exc_info=True)
        all_ok = False

    try:
        logger.info("--- [pfas] Configuration ---")
        pfas = load_pfas_settings(config_file)
        logger.info(_format_settings(pfas))
        all_ok &= _check_inputs("pfas", {
            'alluvial_path': pfas.alluvial_path,
            'gage_path': pfas.gage_path,
            'short_name_path': pfas.short_name_path,
        }, base_dir)
    except Exception as e:
        logger.error(f"Failed to load [pfas] config: {e}", exc_info=True)
        all_ok = False

    return bool(all_ok)
