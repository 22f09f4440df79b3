"""
Workflows package for wqscreen.

This package contains the batch jobs: the hardness-dependent metal screen
and the PFAS stacked bar chart.
"""
from .orchestrator import run_processing_workflow
from .hardness_processor import run_hardness_screen
from .pfas_processor import run_pfas_chart

__all__ = ['run_processing_workflow', 'run_hardness_screen', 'run_pfas_chart']
