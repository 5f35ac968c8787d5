"""
Domain Services - Rollup, mutation, synchronization and view logic for the cost tree.
"""

from .rollup import recompute, grand_total, iter_nodes, terminal_total, verify_rollup
from .field_updates import (
    FieldUpdate,
    SetDescription,
    SetQuantity,
    SetUnit,
    SetUnitPrice,
    SetCategory,
    SetContractType,
    SetRiskLevel,
    SetNotes,
    SetSchedule,
    SaveDetail,
    validate_amount,
)
from .tree_mutations import (
    find_and_apply,
    find_node,
    contains_node,
    update_field,
    add_child,
    add_root,
    delete_node,
    toggle_expand,
    new_child_node,
    new_root_node,
)
from .schedule_sync import (
    ScheduleSummary,
    crew_hours,
    daily_output,
    default_schedule,
    schedule_summary,
    synchronize_node,
    synchronize_resources,
)
from .view_transformer import ViewMode, project, flatten_terminals, bucket_key
from .rate_catalog import RateCatalog
from .resource_editing import (
    ResourceUpdate,
    add_resource,
    update_resource,
    remove_resource,
    apply_catalog_entry,
    set_resource_from_catalog,
)
from .ingestion import ItemDescriptor, IngestionResult, ingest_descriptors
from .analysis import build_analysis_payload

__all__ = [
    # Rollup & numbering
    'recompute',
    'grand_total',
    'iter_nodes',
    'terminal_total',
    'verify_rollup',
    # Typed field updates
    'FieldUpdate',
    'SetDescription',
    'SetQuantity',
    'SetUnit',
    'SetUnitPrice',
    'SetCategory',
    'SetContractType',
    'SetRiskLevel',
    'SetNotes',
    'SetSchedule',
    'SaveDetail',
    'validate_amount',
    # Mutation operators
    'find_and_apply',
    'find_node',
    'contains_node',
    'update_field',
    'add_child',
    'add_root',
    'delete_node',
    'toggle_expand',
    'new_child_node',
    'new_root_node',
    # Schedule-resource synchronizer
    'ScheduleSummary',
    'crew_hours',
    'daily_output',
    'default_schedule',
    'schedule_summary',
    'synchronize_node',
    'synchronize_resources',
    # Views
    'ViewMode',
    'project',
    'flatten_terminals',
    'bucket_key',
    # Catalog & resources
    'RateCatalog',
    'ResourceUpdate',
    'add_resource',
    'update_resource',
    'remove_resource',
    'apply_catalog_entry',
    'set_resource_from_catalog',
    # External interfaces
    'ItemDescriptor',
    'IngestionResult',
    'ingest_descriptors',
    'build_analysis_payload',
]
