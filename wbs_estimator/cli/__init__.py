"""
CLI Module - Command-line interface for the WBS estimator.

Provides commands for:
- Rendering the sample estimate in any view mode
- Querying the rate catalog
- Crew-hour arithmetic
"""

from .estimate_commands import estimate, main, register_commands

__all__ = ['estimate', 'main', 'register_commands']
