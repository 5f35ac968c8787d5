"""
Estimate CLI Commands - Inspect estimates, views and the rate catalog.
"""
import logging
from typing import Optional, Sequence

import click

from wbs_estimator import __version__
from wbs_estimator.config import get_config
from wbs_estimator.domain.entities import CostCategory, CostNode, GroupNode
from wbs_estimator.domain.exceptions import ValidationError
from wbs_estimator.domain.services import (
    RateCatalog,
    ViewMode,
    crew_hours as compute_crew_hours,
    validate_amount,
)
from wbs_estimator.modules import EstimateWorkspace, build_sample_project

logger = logging.getLogger(__name__)

# CLI name -> view mode
VIEW_CHOICES = {
    'standard': ViewMode.STANDARD,
    'contract': ViewMode.CONTRACT,
    'risk': ViewMode.RISK,
    'category': ViewMode.CATEGORY,
}

CATALOG_CATEGORIES = {
    'labor': CostCategory.LABOR,
    'equipment': CostCategory.EQUIPMENT,
}


def _render(nodes: Sequence[CostNode], depth: int = 0) -> None:
    config = get_config()
    for node in nodes:
        label = f"{'  ' * depth}{node.wbs_code} {node.description}"
        amount = config.format_amount(node.total)
        if isinstance(node, GroupNode):
            click.echo(click.style(f"{label:<50} {amount:>16}", bold=True))
            _render(node.children, depth + 1)
        else:
            click.echo(f"{label:<50} {amount:>16}")


@click.group()
@click.version_option(version=__version__)
def estimate():
    """WBS estimate commands."""
    pass


@estimate.command()
@click.option('--mode', type=click.Choice(list(VIEW_CHOICES)), default='standard',
              help='View to render the estimate in')
def show(mode: str):
    """Render the sample estimate in a view."""
    workspace = EstimateWorkspace(build_sample_project())
    workspace.set_mode(VIEW_CHOICES[mode])

    project = workspace.project
    click.echo(click.style(project.name, fg='cyan', bold=True))
    click.echo(f"{project.client} | {project.location} | {workspace.mode.value}")
    click.echo()

    _render(workspace.display_tree)

    click.echo()
    total = get_config().format_amount(workspace.grand_total)
    click.echo(click.style(f"Grand total: {total}", fg='green'))


@estimate.command()
@click.option('--search', 'term', default='', help='Name to search for (fuzzy)')
@click.option('--category', type=click.Choice(list(CATALOG_CATEGORIES)), default=None,
              help='Restrict to labor or equipment')
@click.option('--limit', type=int, default=None, help='Maximum number of results')
def catalog(term: str, category: Optional[str], limit: Optional[int]):
    """Query the standard rate catalog."""
    rates = RateCatalog.from_config()
    results = rates.search(
        term,
        category=CATALOG_CATEGORIES[category] if category else None,
        limit=limit,
    )

    if not results:
        click.echo(click.style(f"No catalog entries match '{term}'", fg='yellow'))
        return

    config = get_config()
    for entry in results:
        click.echo(f"{entry.id:<8} {entry.name:<32} {config.format_amount(entry.rate)}/{entry.unit}")


@estimate.command(name='crew-hours')
@click.argument('duration')
@click.argument('hours_per_day')
def crew_hours(duration: str, hours_per_day: str):
    """Crew hours for a schedule of DURATION days at HOURS_PER_DAY."""
    try:
        days = validate_amount('duration', duration)
        shift = validate_amount('hours_per_day', hours_per_day)
        hours = compute_crew_hours(days, shift)
    except ValidationError as e:
        raise click.BadParameter(e.message)

    click.echo(f"{hours} crew hours")


def register_commands(cli):
    """Register estimate commands with another CLI group."""
    cli.add_command(estimate)


def main():
    """Console entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    estimate()


if __name__ == '__main__':
    main()
