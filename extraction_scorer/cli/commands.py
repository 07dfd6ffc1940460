"""CLI commands for the extraction scorer."""

import click
import asyncio
from pathlib import Path
from typing import List
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from ..exceptions import ExtractionScorerError
from ..filtering.filter_engine import FilterEngine
from ..models.data_models import AnalysisRequest, InvalidPatternFinding, REPORT_COLUMNS
from ..orchestrator.main import ExtractionScoringOrchestrator
from ..reporting.csv_exporter import CsvExporter
from ..reporting.loader import MetricsLoader
from ..reporting.serializer import score_to_record
from ..utils.config import Config, load_filter_configuration, load_scoring_weights
from ..utils.logging import setup_logging_from_config

console = Console()


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--env-file', type=click.Path(), help='Environment (.env) file path')
@click.pass_context
def cli(ctx, debug, env_file):
    """Extraction difficulty scoring for monolith projects."""
    ctx.ensure_object(dict)

    config = Config(env_file)
    ctx.obj['config'] = config

    setup_logging_from_config(config, debug=debug)


@cli.command()
@click.option('--metrics', 'metrics_file', required=True, type=click.Path(exists=True, dir_okay=False),
              help='CSV with project_name, complexity, tech_debt[, coupling, external_apis]')
@click.option('--dependencies', 'dependencies_file', type=click.Path(exists=True, dir_okay=False),
              help='CSV of dependency edges (source, target) used for coupling')
@click.option('--filter-config', type=click.Path(), help='Filter configuration JSON file')
@click.option('--scoring-config', type=click.Path(), help='Scoring weights JSON file')
@click.option('--solution-name', default='solution', help='Solution name used for output files')
@click.option('--output-dir', type=click.Path(file_okay=False), help='Directory for the CSV export')
@click.option('--report', 'report_file', type=click.Path(dir_okay=False), help='Write the report to this file')
@click.option('--format', 'output_format', default='markdown',
              type=click.Choice(['markdown', 'json', 'text']), help='Report format')
@click.option('--strict-filters', is_flag=True, help='Abort when the filter configuration has findings')
@click.pass_context
def score(ctx, metrics_file, dependencies_file, filter_config, scoring_config, solution_name,
          output_dir, report_file, output_format, strict_filters):
    """Score extraction difficulty for every project in a metrics file."""

    config = ctx.obj['config']

    try:
        filter_configuration = load_filter_configuration(filter_config or config.filter_config_path)
        weights = load_scoring_weights(scoring_config or config.scoring_config_path)

        loader = MetricsLoader()
        projects = loader.load_metrics(metrics_file)
        dependencies = loader.load_dependencies(dependencies_file) if dependencies_file else []
    except ExtractionScorerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    findings = FilterEngine(filter_configuration).validate()
    if findings:
        display_findings(findings)
        if strict_filters:
            console.print("[red]Aborting: filter configuration has findings (--strict-filters)[/red]")
            ctx.exit(1)

    request = AnalysisRequest(
        projects=projects,
        dependencies=dependencies,
        filter_configuration=filter_configuration,
        weights=weights,
        solution_name=solution_name,
        output_format=output_format
    )

    async def run_analysis():
        orchestrator = ExtractionScoringOrchestrator(config)
        try:
            await orchestrator.start()
            return await orchestrator.analyze(request)
        finally:
            await orchestrator.stop()

    result = asyncio.run(run_analysis())

    if result.status == "failed" and not result.records:
        display_analysis_results(result)
        ctx.exit(1)

    export_path = CsvExporter().export_extraction_scores(
        result.scores, output_dir or config.output_directory, solution_name
    )
    console.print(f"[green]Extraction scores saved to {export_path}[/green]")

    if report_file and result.report:
        Path(report_file).write_text(result.report, encoding="utf-8")
        console.print(f"[green]Report saved to {report_file}[/green]")

    display_analysis_results(result)


@cli.command('validate-filters')
@click.option('--filter-config', type=click.Path(), help='Filter configuration JSON file')
@click.pass_context
def validate_filters(ctx, filter_config):
    """Check blocklist and allowlist patterns for problems."""

    config = ctx.obj['config']
    path = filter_config or config.filter_config_path

    try:
        filter_configuration = load_filter_configuration(path)
    except ExtractionScorerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    console.print(Panel.fit(
        f"Blocklist patterns: {len(filter_configuration.block_list)}\n"
        f"Allowlist patterns: {len(filter_configuration.allow_list)}",
        title="Filter configuration",
        border_style="blue"
    ))

    findings = FilterEngine(filter_configuration).validate()
    if not findings:
        console.print("[green]✓ No problems found[/green]")
        return

    display_findings(findings)
    ctx.exit(1)


@cli.command('check-scope')
@click.argument('namespaces', nargs=-1, required=True)
@click.option('--filter-config', type=click.Path(), help='Filter configuration JSON file')
@click.pass_context
def check_scope(ctx, namespaces, filter_config):
    """Show whether each NAMESPACE counts toward dependency analysis."""

    config = ctx.obj['config']

    try:
        filter_configuration = load_filter_configuration(filter_config or config.filter_config_path)
        engine = FilterEngine(filter_configuration)

        if engine.validate():
            console.print("[red]Filter configuration has findings; run validate-filters first[/red]")
            ctx.exit(1)
    except ExtractionScorerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    table = Table(title="Dependency scope")
    table.add_column("Namespace", style="cyan")
    table.add_column("Scope")

    for namespace in namespaces:
        in_scope = engine.is_in_scope(namespace)
        table.add_row(escape(namespace), "[green]in scope[/green]" if in_scope else "[yellow]filtered[/yellow]")

    console.print(table)


def display_findings(findings: List[InvalidPatternFinding]):
    """Display filter validation findings in console."""
    table = Table(title="Filter configuration findings")
    table.add_column("List", style="cyan")
    table.add_column("Index", style="magenta")
    table.add_column("Pattern", style="yellow")
    table.add_column("Problem")

    for finding in findings:
        table.add_row(finding.list_name, str(finding.index), escape(repr(finding.pattern)), escape(finding.message))

    console.print(table)


def display_analysis_results(result):
    """Display analysis results in console."""
    if result.errors:
        console.print(f"[red]Analysis failed: {escape(', '.join(result.errors))}[/red]")

    if result.ranked and result.ranked.all_projects:
        table = Table(title="Extraction candidates (easiest first)")
        table.add_column("Rank", style="cyan")
        for column in REPORT_COLUMNS:
            table.add_column(column)

        for i, score in enumerate(result.ranked.all_projects, 1):
            row = score_to_record(score).to_row()
            table.add_row(str(i), *(escape(str(v)) for v in row.values()))

        console.print(table)

        stats = result.ranked.statistics
        console.print(
            f"Easy: {stats.easy_count}  Medium: {stats.medium_count}  Hard: {stats.hard_count}"
        )

    if result.failures:
        console.print("\n[yellow]Projects not scored:[/yellow]")
        for failure in result.failures:
            console.print(f"  ⚠ {escape(failure.project_name)}: {escape(failure.reason)}")

    console.print(f"\n[dim]Analysis completed in {result.execution_time:.2f}s[/dim]")


if __name__ == '__main__':
    cli()
