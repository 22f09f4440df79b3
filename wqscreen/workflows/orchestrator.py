"""Runs the selected batch jobs in order."""
import logging
from dataclasses import replace
from typing import Dict, Optional

from ..services.config_loader import load_hardness_settings, load_pfas_settings, DEFAULT_CONFIG_FILE
from ..services.repository import TableRepository
from .hardness_processor import run_hardness_screen
from .pfas_processor import run_pfas_chart

logger = logging.getLogger(__name__)


def run_processing_workflow(hardness: bool, pfas: bool, config_file: str = DEFAULT_CONFIG_FILE,
                            base_dir: str = ".", strict_criteria: bool = False,
                            seed: Optional[int] = None,
                            output_path: Optional[str] = None) -> Dict[str, str]:
    """
    Main entry point called by wqscreen_cli.py.

    Args:
        hardness: Run the hardness-dependent metal screen
        pfas: Run the PFAS stacked bar chart
        config_file: Config file name in config/ or an absolute path
        base_dir: Directory that relative data/output paths resolve against
        strict_criteria: Reject unrecognized criteria labels (overrides config when True)
        seed: Palette seed for the PFAS chart
        output_path: Output override; only valid when a single job is selected

    Returns:
        Dict of job name -> written file path

    Raises:
        ValueError: output_path given with both jobs selected
    """
    if output_path and hardness and pfas:
        raise ValueError("--output can only be used when a single job is selected")

    repository = TableRepository(base_dir)
    outputs: Dict[str, str] = {}

    if hardness:
        settings = load_hardness_settings(config_file)
        if strict_criteria:
            settings = replace(settings, strict_criteria=True)
        outputs['hardness'] = run_hardness_screen(settings, repository, output_path=output_path)

    if pfas:
        settings = load_pfas_settings(config_file)
        outputs['pfas'] = run_pfas_chart(settings, repository, output_path=output_path, seed=seed)

    logger.info(f"--- Workflow Finished: {outputs} ---")
    return outputs
