# WBS Estimator - Modules
from .workspace import EstimateWorkspace, ItemGenerator, RiskSummarizer
from .sample_data import build_sample_project

__all__ = [
    "EstimateWorkspace",
    "ItemGenerator",
    "RiskSummarizer",
    "build_sample_project",
]
