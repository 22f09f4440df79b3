"""Hardness-dependent metal screening job."""
import logging
from datetime import datetime
from typing import Optional

from ..analysis.hardness_screen import screen_metals
from ..analysis.models import HardnessSettings
from ..services.repository import TableRepository

logger = logging.getLogger(__name__)


def run_hardness_screen(settings: HardnessSettings, repository: Optional[TableRepository] = None,
                        output_path: Optional[str] = None) -> str:
    """
    Reads samples and criteria, screens them and writes the result workbook.

    Any I/O or validation error propagates; the run either completes or
    produces no output.

    Args:
        settings: File locations and the strict_criteria flag
        repository: TableRepository to use (default: working directory)
        output_path: Overrides settings.output_path when given

    Returns:
        Path of the written workbook
    """
    repository = repository or TableRepository()
    output_path = output_path or settings.output_path
    logger.info("--- Starting Hardness Screen ---")
    dt_start = datetime.now()

    # Read both inputs before computing anything
    samples = repository.read_sample_data(settings.sample_data_path)
    acute, chronic = repository.read_criteria(settings.criteria_path, strict=settings.strict_criteria)

    results = screen_metals(samples, acute, chronic)
    written = repository.write_screening_results(results, output_path)

    n_exceed = int(results['exceeds'].sum())
    logger.info(f"Hardness-dependent metal screening complete: {n_exceed} of {len(results)} rows exceed. "
                f"Results saved to: {written}")
    logger.info(f"--- Hardness Screen Finished in {datetime.now() - dt_start} ---")
    return written
