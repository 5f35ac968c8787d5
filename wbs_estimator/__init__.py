"""
WBS Estimator - Hierarchical construction cost estimates with alternate views.
"""

__version__ = "1.0.0"
