"""
Domain Layer - Core estimate entities and services.

This module contains:
- entities/: Immutable domain objects (CostNode, GroupNode, TerminalNode, ResourceLine, Project)
- services/: Domain services (rollup, mutations, schedule sync, view transformation)
"""

from .entities import (
    CostNode, GroupNode, TerminalNode, Schedule,
    ResourceLine, CostCategory, ContractType, RiskLevel,
    Project, ProjectStatus, CatalogEntry,
)

__all__ = [
    'CostNode', 'GroupNode', 'TerminalNode', 'Schedule',
    'ResourceLine', 'CostCategory', 'ContractType', 'RiskLevel',
    'Project', 'ProjectStatus', 'CatalogEntry',
]
