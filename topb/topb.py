import json
from pathlib import Path

import click

from .logging_utils import configure_logging
from .pipeline import (
    CodeGeneratorConfig,
    DiscoveryMode,
    EmbeddedFieldPolicy,
    PipelineGenerator,
    ReportStatus,
    TopbError,
)

_STATUS_VERBS = {
    ReportStatus.WRITTEN: "wrote",
    ReportStatus.UNCHANGED: "unchanged",
    ReportStatus.PRUNED: "pruned",
}


@click.command()
@click.option(
    "--in",
    "inputs",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Go file or directory to process (repeatable). Without it, //go:generate directives are scanned.",
)
@click.option("--pb", "wire_package", default=None, type=str, help="Import path of the wire (protobuf) package")
@click.option(
    "--dir",
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Root of the tree scanned for directives",
)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--embedded",
    default=None,
    type=click.Choice([policy.value for policy in EmbeddedFieldPolicy]),
    help="How to handle embedded struct fields",
)
@click.option("--prune/--no-prune", default=None, help="Delete outputs of files that no longer have annotated types")
@click.option("--format/--no-format", "format_output", default=None, help="Run gofmt on generated code")
@click.option("--header/--no-header", default=None, help="Start generated files with a 'Code generated' comment")
@click.option("--verbose", "-v", is_flag=True, default=False)
def topb(inputs, wire_package, root, config, embedded, prune, format_output, header, verbose):
    configure_logging(verbose=verbose)

    try:
        if config is not None:
            with open(config) as f:
                config = CodeGeneratorConfig.from_dict(json.load(f))
        else:
            config = CodeGeneratorConfig()
    except (OSError, json.JSONDecodeError, TopbError) as e:
        click.echo(f"error: invalid configuration: {e}")
        return

    # Command line flags override the config file
    if wire_package is not None:
        config.wire_package = wire_package
    if embedded is not None:
        config.embedded_fields = EmbeddedFieldPolicy(embedded)
    if prune is not None:
        config.output.prune_stale = prune
    if format_output is not None:
        config.formatter.enabled = format_output
    if header is not None:
        config.add_generation_comment = header

    if inputs:
        config.discovery = DiscoveryMode.EXPLICIT
        paths = list(inputs)
    else:
        config.discovery = DiscoveryMode.DIRECTIVE
        paths = [root]

    reports = PipelineGenerator(config).run(paths)

    if not reports and verbose:
        click.echo("nothing to generate")

    for report in reports:
        if report.status == ReportStatus.FAILED:
            click.echo(f"error: {report.error}")
        elif report.status == ReportStatus.SKIPPED:
            if verbose:
                click.echo(f"skipped {report.source} (no {config.marker} types)")
        else:
            click.echo(f"{_STATUS_VERBS[report.status]} {report.output}")
