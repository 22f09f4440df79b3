# wqscreen/analysis/pfas_chart.py
"""
Stacked bar chart of detected PFAS concentrations by site, one panel per
sample type (groundwater, baseflow, stormflow).
"""
import logging
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
from matplotlib import pyplot as plt
from matplotlib import colors as mcolors
from matplotlib.patches import Patch
from typing import Iterable, List, Optional

from .models import (
    DETECTED_YES,
    PFAS_COLUMNS,
    PFAS_GAGE_DATES,
    PFAS_GAGE_LOCATIONS,
    PFAS_LAB_METHOD,
    PFAS_PALETTE_SIZE,
    PFAS_PANEL_LABELS,
    PFAS_SAMPLE_PURPOSE,
    InputSchemaError,
)
from ..core import utils

logger = logging.getLogger(__name__)

CHART_TITLE = "PFAS Chemical Concentrations by Site and Sample Type"
Y_LABEL = "Report Result (ng/L)"
LEGEND_TITLE = "Detected PFAS Chemicals"
FIGSIZE_IN = (16, 8)


def _project(df: pd.DataFrame, source: str) -> pd.DataFrame:
    missing = utils.missing_columns(df, PFAS_COLUMNS)
    if missing:
        raise InputSchemaError(f"PFAS {source} export is missing columns: {missing}")
    return df.loc[:, list(PFAS_COLUMNS)].reset_index(drop=True)


def prepare_alluvial(df: pd.DataFrame) -> pd.DataFrame:
    """Regular (REG) EPA 1633 alluvial well samples; location_id is used as the alias."""
    keep = (df["sample_purpose"] == PFAS_SAMPLE_PURPOSE) & (df["lab_method"] == PFAS_LAB_METHOD)
    out = df.loc[keep].copy()
    out["location_alias"] = out["location_id"]
    return _project(out, "alluvial")


def prepare_gage(df: pd.DataFrame, locations: Iterable[str] = PFAS_GAGE_LOCATIONS,
                 dates=PFAS_GAGE_DATES) -> pd.DataFrame:
    """Gage samples at the given locations on the given sampling dates."""
    keep = (
        df["location_alias"].isin(list(locations))
        & df["sample_date"].isin(pd.to_datetime(list(dates)))
    )
    return _project(df.loc[keep], "gage")


def combine_pfas(alluvial: pd.DataFrame, gage: pd.DataFrame, short_names: pd.DataFrame) -> pd.DataFrame:
    """Unions both sources, keeps detected results and attaches the short-name lookup."""
    combined = pd.concat([alluvial, gage], ignore_index=True)
    combined = combined.loc[combined["detected"] == DETECTED_YES]
    combined = combined.merge(short_names, on="parameter_code", how="inner", suffixes=("", "_lookup"))
    logger.info(f"PFAS chart data: {len(combined)} detected results, "
                f"{combined['parameter_name'].nunique()} chemicals")
    return combined.reset_index(drop=True)


def build_palette(n: int, palette: str = "plasma", seed: Optional[int] = None) -> List[str]:
    """
    Returns n hex colors.

    A matplotlib colormap name gives evenly spaced colors from that map.
    'random' draws distinct named colors with a seeded generator, so the
    same seed always yields the same palette.
    """
    if n <= 0:
        return []
    if palette == "random":
        # several names share a value (gray/grey, aqua/cyan)
        hexes = sorted({mcolors.to_hex(c) for c in mcolors.CSS4_COLORS.values()})
        if n > len(hexes):
            raise ValueError(f"Cannot draw {n} distinct named colors (max {len(hexes)})")
        rng = np.random.default_rng(seed)
        return [str(c) for c in rng.choice(hexes, size=n, replace=False)]

    try:
        cmap = matplotlib.colormaps[palette]
    except KeyError:
        raise ValueError(f"Unknown palette '{palette}'")
    return [mcolors.to_hex(cmap(x)) for x in np.linspace(0.0, 1.0, n)]


def plot_pfas_stacked_bar(df: pd.DataFrame, colors: List[str]):
    """
    Draws stacked report_result bars per location, colored by chemical,
    with one panel per sample type.

    Returns:
        matplotlib Figure (caller saves and closes it)
    """
    if df.empty:
        raise ValueError("No detected PFAS results to plot")

    chemicals = sorted(df["parameter_name"].dropna().unique())
    if len(colors) < len(chemicals):
        raise ValueError(f"Palette has {len(colors)} colors for {len(chemicals)} chemicals")
    color_map = dict(zip(chemicals, colors))
    sample_types = sorted(df["sample_type"].dropna().unique())

    fig, axes = plt.subplots(1, len(sample_types), figsize=FIGSIZE_IN, squeeze=False)
    for ax, sample_type in zip(axes[0], sample_types):
        panel = df.loc[df["sample_type"] == sample_type]
        table = panel.pivot_table(index="location_alias", columns="parameter_name",
                                  values="report_result", aggfunc="sum", fill_value=0.0)
        x = np.arange(len(table.index))
        bottom = np.zeros(len(table.index))
        for chem in table.columns:
            heights = table[chem].to_numpy(dtype=float)
            ax.bar(x, heights, width=0.7, bottom=bottom, color=color_map[chem])
            bottom += heights

        ax.set_xticks(x)
        ax.set_xticklabels(table.index, rotation=45, ha='right')
        ax.set_title(PFAS_PANEL_LABELS.get(sample_type, sample_type))
        ax.grid(axis='y', alpha=0.3)

    axes[0][0].set_ylabel(Y_LABEL)
    handles = [Patch(facecolor=color_map[chem], label=chem) for chem in chemicals]
    fig.legend(handles=handles, title=LEGEND_TITLE, loc='center right')
    fig.suptitle(CHART_TITLE)
    fig.tight_layout(rect=(0, 0, 0.82, 0.95))
    return fig


def render_chart(alluvial: pd.DataFrame, gage: pd.DataFrame, short_names: pd.DataFrame,
                 palette: str = "plasma", seed: Optional[int] = None,
                 gage_locations: Iterable[str] = PFAS_GAGE_LOCATIONS):
    """Runs filter -> union -> join -> plot on cleaned exports and returns the Figure."""
    data = combine_pfas(
        prepare_alluvial(alluvial),
        prepare_gage(gage, locations=gage_locations),
        short_names,
    )
    n_colors = max(PFAS_PALETTE_SIZE, data["parameter_name"].nunique())
    colors = build_palette(n_colors, palette=palette, seed=seed)
    return plot_pfas_stacked_bar(data, colors)
