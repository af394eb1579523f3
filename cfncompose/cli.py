"""
cfncompose CLI entry point.
"""
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cfncompose import __version__
from cfncompose.config import apply_config, load_config
from cfncompose.discovery import render_discovery
from cfncompose.merge import merge_templates
from cfncompose.models.errors import (
    CfnComposeError,
    ConfigError,
    RenderingFailure,
    TemplateCollision,
)
from cfncompose.models.template import Template
from cfncompose.outputs import resolve_outputs
from cfncompose.parsers import cloudformation
from cfncompose.reporters import json_reporter, yaml_reporter

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configure_logging(level: str, no_color: bool) -> None:
    """Send cfncompose log records to stderr through rich."""
    pkg_logger = logging.getLogger("cfncompose")
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)


def _load(path: str, stderr: Console) -> Template:
    try:
        return cloudformation.parse_file(path)
    except CfnComposeError as exc:
        stderr.print(f"[red]Parse error:[/red] {exc}")
        sys.exit(2)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: ./cfncompose.yaml if present).",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable rich terminal color output.",
)
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: Optional[str], no_color: bool):
    """cfncompose — merge CloudFormation templates and describe resource outputs."""
    stderr = Console(stderr=True, no_color=no_color)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        stderr.print(f"[red]Config error:[/red] {exc}")
        sys.exit(2)

    _configure_logging((log_level or config.log_level).upper(), no_color)
    apply_config(config)

    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color
    ctx.obj["config"] = config


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("destination", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write the merged template to this file (default: stdout).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def merge(ctx, source: str, destination: str, output: Optional[str], output_format: str) -> None:
    """
    Merge SOURCE into DESTINATION and print the combined template.

    Fails with exit code 1 if both templates declare the same resource,
    mapping or output name.
    """
    stderr = Console(stderr=True, no_color=ctx.obj["no_color"])

    src = _load(source, stderr)
    dst = _load(destination, stderr)

    try:
        merge_templates(src, dst)
    except TemplateCollision as exc:
        stderr.print(
            f"[red]Template merge failed:[/red] {len(exc.collisions)} collision(s) "
            f"between {source} and {destination}"
        )
        for c in exc.collisions:
            stderr.print(f"  [bold]{c.collection}[/bold] {c.name}")
        sys.exit(1)

    if output_format.lower() == "yaml":
        content = yaml_reporter.build_report(dst)
    else:
        content = json_reporter.build_report(dst)

    if output:
        with open(output, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        stderr.print(
            f"Merged [bold]{len(dst.resources)}[/bold] resources into [bold]{output}[/bold]"
        )
    else:
        click.echo(content)


@cli.command()
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.argument("logical_name")
@click.pass_context
def discover(ctx, template: str, logical_name: str) -> None:
    """Print the discovery document for LOGICAL_NAME in TEMPLATE."""
    stderr = Console(stderr=True, no_color=ctx.obj["no_color"])
    tmpl = _load(template, stderr)

    try:
        document = render_discovery(tmpl, logical_name)
    except RenderingFailure as exc:
        stderr.print(f"[red]Rendering error:[/red] {exc}")
        sys.exit(2)

    if document is None:
        stderr.print(f"[yellow]No resource named[/yellow] {logical_name} in {template}.")
        return

    click.echo(document.decode("utf-8"), nl=False)


@cli.command()
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def outputs(ctx, template: str) -> None:
    """List the Fn::GetAtt attributes each resource in TEMPLATE exposes."""
    no_color = ctx.obj["no_color"]
    tmpl = _load(template, Console(stderr=True, no_color=no_color))

    tbl = Table(title="Resource Outputs", show_header=True, header_style="bold")
    tbl.add_column("Resource")
    tbl.add_column("Type", style="dim")
    tbl.add_column("Attributes")

    for name, resource in tmpl.resources.items():
        attrs = resolve_outputs(resource.properties)
        tbl.add_row(name, resource.resource_type, ", ".join(attrs) if attrs else "-")

    Console(no_color=no_color).print(tbl)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
