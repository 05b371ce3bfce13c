"""Command-line interface for scan report."""

import click
import sys
from typing import Optional

from . import __version__
from .exceptions import ScanReportError
from .profiling.profiler import FileProfiler
from .reporting.report_generator import ReportGenerator
from .sources.discovery import discover_files
from .utils.config_loader import ConfigLoader
from .utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
def cli():
    """Scan delimited files and report column types, statistics and frequencies."""
    pass


@cli.command('scan')
@click.option('--working-folder', '-w', required=True,
              type=click.Path(file_okay=False), help='Folder where input files are located')
@click.option('--delimiter', '-d', type=click.Choice(['tab', 'comma'], case_sensitive=False),
              default=None, help="Delimiter: 'tab' scans *.tsv, 'comma' scans *.csv [default: tab]")
@click.option('--output-dir', '-o', default='.', help='Output directory for reports')
@click.option('--output-format', '-f', type=click.Choice(['xlsx', 'tsv'], case_sensitive=False),
              default='xlsx', show_default=True, help='One Excel workbook or multiple TSV files')
@click.option('--max-rows', '-m', type=int, default=None, help='Maximum rows to read per file (-1 for all)')
@click.option('--max-distinct-values', '-x', type=int, default=None,
              help='Maximum distinct values listed per column')
@click.option('--min-cell-count', type=int, default=None,
              help='Hide values occurring fewer times than this')
@click.option('--prefix', '-p', default='ScanReport', show_default=True, help='Prefix for output files')
@click.option('--workers', '-c', type=int, default=None, help='Number of files scanned in parallel')
@click.option('--exclude-cols', '-e', default=None, help='Comma-separated list of columns to exclude')
@click.option('--shift-dates', '-s', is_flag=True, default=None,
              help='Randomly shift date/datetime values by up to +/-5 days before summarizing')
@click.option('--random-sample', '-r', is_flag=True, default=None,
              help='Pick --max-rows rows at random instead of the first rows')
@click.option('--seed', type=int, default=None, help='Random seed for reproducible runs')
@click.option('--config', help='Path to config YAML file')
@click.option('--env', help='Path to .env file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def scan(
    working_folder: str,
    delimiter: Optional[str],
    output_dir: str,
    output_format: str,
    max_rows: Optional[int],
    max_distinct_values: Optional[int],
    min_cell_count: Optional[int],
    prefix: str,
    workers: Optional[int],
    exclude_cols: Optional[str],
    shift_dates: Optional[bool],
    random_sample: Optional[bool],
    seed: Optional[int],
    config: Optional[str],
    env: Optional[str],
    verbose: bool
):
    """
    Scan every delimited file in a folder and write a scan report.

    Examples:
        # Whole files, one workbook
        scan-report scan -w ./data -d comma -o ./reports

        # 10,000 random rows per file, dates shifted, TSV output
        scan-report scan -w ./data -m 10000 -r -s -f tsv --seed 42
    """
    setup_logging(verbose=verbose)

    try:
        config_loader = ConfigLoader(config_path=config, env_path=env)
        profiler_config = config_loader.to_profiler_config(
            delimiter=delimiter.lower() if delimiter else None,
            row_budget=max_rows,
            max_distinct_values=max_distinct_values,
            min_cell_count=min_cell_count,
            workers=workers,
            excluded_columns=exclude_cols,
            shift_dates=shift_dates,
            random_sample=random_sample,
            seed=seed,
        )

        files = discover_files(working_folder, profiler_config.delimiter)
        if not files:
            click.echo(f"❌ No input files found in {working_folder}", err=True)
            sys.exit(1)

        if profiler_config.excluded_columns:
            click.echo(f"Excluding columns: {', '.join(sorted(profiler_config.excluded_columns))}")

        click.echo(f"\n🔍 Scanning {len(files)} file(s) in {working_folder}")
        click.echo(f"{'='*60}\n")

        profiler = FileProfiler(profiler_config)
        reports, failures = profiler.profile_files(files)

        for path, error in failures.items():
            click.echo(f"⚠️  Skipped {path}: {error.message}", err=True)

        if not reports:
            click.echo("❌ No file could be scanned", err=True)
            sys.exit(1)

        report_gen = ReportGenerator(output_dir, prefix=prefix)
        written = report_gen.generate(reports, fmt=output_format)

        click.echo(f"\n✅ Reports generated:")
        for path in written:
            click.echo(f"  {path}")

    except ScanReportError as e:
        click.echo(f"\n❌ Error: {e.message}", err=True)
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
