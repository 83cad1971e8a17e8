# egogen/cli/interface.py
import io
import sys
from pathlib import Path
from typing import Any, Optional

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from egogen import __version__ as app_version
from egogen.config.loader import load_and_merge_configs, build_config
from egogen.config.settings import GeneratorConfig
from egogen.core.output import write_to_stdout, write_to_file
from egogen.core.package import Package, PackageStats
from egogen.exceptions import EgoError, HeaderParseError
from egogen.logging_setup import configure_logging
from egogen.manifest import load_manifest

log = structlog.get_logger(__name__)

def _print_cli_summary_output(package: Package, stats: PackageStats):
    table = Table(title=f"package {package.name}", show_header=False)
    table.add_column("item", style="cyan")
    table.add_column("count", justify="right")
    table.add_row("templates", str(stats.templates))
    table.add_row("blocks", str(stats.blocks))
    table.add_row("text blocks", str(stats.text_occurrences))
    table.add_row("distinct literals", str(stats.literals))
    table.add_row("imports", str(stats.imports))
    RichConsole(stderr=True).print(table)

def _run_compile_flow(manifest_path: Path, config: GeneratorConfig, package_override: Optional[str],
                      output_file: Optional[Path], show_summary: bool):
    package = load_manifest(manifest_path)
    if package_override:
        package.name = package_override
    elif not package.name and config.package_name:
        package.name = config.package_name
    log.info("compile_started", manifest=str(manifest_path), package=package.name)

    if config.normalize:
        package.normalize()

    # rendered fully in memory; a failing template never leaves a partial file behind.
    buf = io.StringIO()
    stats = package.write(buf, config)
    generated = buf.getvalue()

    if output_file:
        write_to_file(output_file, generated)
        click.echo(f"Info: Output written to: {output_file}", err=True)
    else:
        write_to_stdout(generated)

    if show_summary:
        _print_cli_summary_output(package, stats)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="egogen", prog_name="egogen", help="Show version and exit.")
def main_cli_group(verbosity_level: int, force_json_logs: bool):
    """egogen: compile scanned ego templates into a single Go source file."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs)


@main_cli_group.command("compile")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path))
@optgroup.group("Output Options", help="Where and how the generated file is written.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the generated Go file to. Default: stdout.")
@optgroup.option("--package", "package_name", default=None, help="Go package name; overrides the manifest's name.")
@optgroup.option("--tool-name", "tool_name", default=None, help="Tool name shown in the generated-file banner.")
@optgroup.group("Generation Options", help="Control how templates are turned into code.")
@optgroup.option("--line-markers/--no-line-markers", "line_markers", default=None, help="Emit //line directives before each block. Default: off.")
@optgroup.option("--normalize/--no-normalize", "normalize", default=None, help="Merge adjacent text blocks before rendering. Default: on.")
@optgroup.group("Console Feedback", help="Terminal output during execution (stderr).")
@optgroup.option("--summary", "show_summary", is_flag=True, default=False, help="Print a summary table to stderr.")
def compile_command(manifest: Path, **cli_params: Any):
    """Compile a block MANIFEST (JSON scanner output) into Go source."""
    log.debug("cli_command_invoked", manifest=str(manifest), params=cli_params)
    try:
        raw_configs_from_toml_files = load_and_merge_configs()
        config = build_config(
            raw_configs_from_toml_files,
            tool_name=cli_params["tool_name"],
            line_markers=cli_params["line_markers"],
            normalize=cli_params["normalize"],
        )
        _run_compile_flow(manifest, config, cli_params["package_name"],
                          cli_params["output_file"], cli_params["show_summary"])
    except HeaderParseError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        click.echo(e.source, err=True)
        sys.exit(1)
    except EgoError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException:
        raise
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
