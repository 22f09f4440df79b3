"""PFAS stacked bar chart job."""
import logging
from typing import Optional

from ..analysis import pfas_chart
from ..analysis.models import PfasSettings
from ..services.repository import TableRepository

logger = logging.getLogger(__name__)


def run_pfas_chart(settings: PfasSettings, repository: Optional[TableRepository] = None,
                   output_path: Optional[str] = None, seed: Optional[int] = None) -> str:
    """
    Reads both PFAS exports and the short-name lookup, renders the stacked
    bar chart and saves it as PNG.

    Args:
        settings: File locations, palette and seed
        repository: TableRepository to use (default: working directory)
        output_path: Overrides settings.output_path when given
        seed: Overrides settings.seed when given

    Returns:
        Path of the saved image
    """
    repository = repository or TableRepository()
    output_path = output_path or settings.output_path
    seed = settings.seed if seed is None else seed
    logger.info("--- Starting PFAS Chart ---")

    alluvial = repository.read_pfas_export(settings.alluvial_path)
    gage = repository.read_pfas_export(settings.gage_path)
    short_names = repository.read_short_names(settings.short_name_path)

    if settings.palette == "random" and seed is None:
        logger.warning("Random palette without a seed: colors will differ between runs")

    fig = pfas_chart.render_chart(
        alluvial, gage, short_names,
        palette=settings.palette, seed=seed,
        gage_locations=settings.gage_locations,
    )
    written = repository.save_chart(fig, output_path)
    logger.info("--- PFAS Chart Finished ---")
    return written
