"""
Schedule-Resource Synchronizer - Keeps labor/equipment quantities on schedule.

For a terminal item:
    crew_hours = round(duration × hours_per_day, 2)

Every Labor and Equipment resource line is forced to `crew_hours` hours;
Material, Subcontractor and Indirect lines are left alone.

    daily_output = quantity / duration   (0 when duration is 0)
"""
import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Sequence, Tuple

from ...config import get_config
from ..entities import ResourceLine, Schedule, TerminalNode, as_decimal
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

HOUR_UNIT = "hr"


@dataclass(frozen=True)
class ScheduleSummary:
    """Advisory schedule figures for the item being edited."""
    crew_hours: Decimal
    daily_output: Decimal


def _quantum(precision: Optional[int]) -> Decimal:
    if precision is None:
        precision = get_config().crew_hours_precision
    return Decimal(1).scaleb(-precision)


def _round(field: str, value: Decimal, precision: Optional[int]) -> Decimal:
    """
    Round half-up to the configured precision.

    Raises:
        ValidationError: If the value is too large to keep that precision
    """
    try:
        return value.quantize(_quantum(precision), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(field, f"{value} is too large")


def default_schedule() -> Schedule:
    """Schedule applied to items that do not carry one yet."""
    config = get_config()
    return Schedule(duration=config.default_duration, hours_per_day=config.default_hours_per_day)


def crew_hours(duration, hours_per_day, precision: Optional[int] = None) -> Decimal:
    """
    Total crew hours for a schedule, rounded half-up.

    Args:
        duration: Working days
        hours_per_day: Shift length
        precision: Decimal places (defaults to configuration)

    Returns:
        Crew hours
    """
    hours = as_decimal(duration) * as_decimal(hours_per_day)
    return _round("crew_hours", hours, precision)


def daily_output(quantity, duration, precision: Optional[int] = None) -> Decimal:
    """
    Scope quantity produced per working day.

    A zero duration is a degenerate schedule, not an error: output is 0.
    """
    duration = as_decimal(duration)
    if duration == 0:
        return Decimal("0")
    output = as_decimal(quantity) / duration
    return _round("daily_output", output, precision)


def synchronize_resources(
    resources: Sequence[ResourceLine],
    hours: Decimal,
) -> Tuple[ResourceLine, ...]:
    """
    Force schedule-driven resource lines to the given crew hours.

    Lines already at the right quantity are reused as-is; when nothing
    changes the input sequence itself is returned.

    Args:
        resources: Resource lines of a terminal item
        hours: Crew hours from the item's schedule

    Returns:
        Synchronized resource lines
    """
    if hours <= 0:
        return resources

    changed = False
    synced = []
    for resource in resources:
        if resource.is_schedule_driven and resource.quantity != hours:
            resource = replace(resource, quantity=hours, unit=HOUR_UNIT)
            changed = True
        synced.append(resource)

    if not changed:
        return resources

    logger.debug(f"Synchronized resource quantities to {hours} crew hours")
    return tuple(synced)


def synchronize_node(node: TerminalNode) -> TerminalNode:
    """
    Apply the node's schedule to its resource lines.

    Items without a schedule use the configured default schedule.
    """
    if not node.resources:
        return node

    schedule = node.schedule or default_schedule()
    hours = crew_hours(schedule.duration, schedule.hours_per_day)
    resources = synchronize_resources(node.resources, hours)
    if resources is node.resources:
        return node
    return replace(node, resources=resources)


def schedule_summary(node: TerminalNode) -> ScheduleSummary:
    """Crew hours and daily output of a terminal item."""
    schedule = node.schedule or default_schedule()
    return ScheduleSummary(
        crew_hours=crew_hours(schedule.duration, schedule.hours_per_day),
        daily_output=daily_output(node.quantity, schedule.duration),
    )
