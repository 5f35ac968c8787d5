"""
Domain Entities - Core immutable estimate objects.
"""

from .resource_line import ResourceLine, CostCategory, SCHEDULE_DRIVEN_CATEGORIES, new_id, as_decimal
from .cost_node import CostNode, GroupNode, TerminalNode, Schedule, ContractType, RiskLevel
from .project import Project, ProjectStatus
from .catalog_entry import CatalogEntry

__all__ = [
    'ResourceLine', 'CostCategory', 'SCHEDULE_DRIVEN_CATEGORIES', 'new_id', 'as_decimal',
    'CostNode', 'GroupNode', 'TerminalNode', 'Schedule', 'ContractType', 'RiskLevel',
    'Project', 'ProjectStatus',
    'CatalogEntry',
]
