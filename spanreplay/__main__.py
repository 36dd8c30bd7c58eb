import sys

import click

from spanreplay.config import load_config
from spanreplay.doctor import check_config
from spanreplay.error_handler import handle_error
from spanreplay.log import init_logger, logger
from spanreplay.tracing import ReplayRun

# Exit status after an interrupted but flushed run
EXIT_INTERRUPTED = 130


@click.group()
def cli():
    pass


@cli.command()
@click.option(
    "-c",
    "--config-path",
    "config_path",
    type=click.Path(exists=True),
    required=False,
    help="Path to configuration file",
)
@click.option(
    "--database-url",
    type=str,
    required=False,
    help="The source database URL (default: DATABASE_URL)",
)
@click.option(
    "--endpoint",
    type=str,
    required=False,
    help="The OTLP gRPC collector endpoint, e.g. localhost:4317",
)
def run(
    config_path: str | None,
    database_url: str | None,
    endpoint: str | None,
):
    """
    Replay all captured spans to the collector once, then exit.
    """
    try:
        config = load_config(config_path)
        if database_url:
            config.source.database_url = database_url
        if endpoint:
            config.exporter.endpoint = endpoint
        init_logger(config)

        logger.info("Running spanreplay...")
        summary = ReplayRun(config).run()
    except Exception as e:
        handle_error(e, exit_on_error=True)
        return

    if summary.interrupted:
        sys.exit(EXIT_INTERRUPTED)
    logger.info("Done!")


@cli.command()
@click.option(
    "-c",
    "--config-path",
    "config_path",
    type=click.Path(exists=True),
    required=False,
    help="Path to configuration file",
)
def doctor(config_path: str | None):
    """
    Check the configuration without connecting to anything.
    """
    try:
        config = load_config(config_path)
    except Exception as e:
        handle_error(e, exit_on_error=True)
        return

    report = check_config(config)
    click.echo(f"Service name: {report['service_name']}")
    click.echo(f"Relation: {report['relation']}")
    click.echo(f"Endpoint: {report['endpoint']}")

    if report["errors"]:
        click.echo("\nErrors:")
        for error in report["errors"]:
            click.echo(f"  - {error['field']}: {error['message']}")
    if report["warnings"]:
        click.echo("\nWarnings:")
        for warning in report["warnings"]:
            click.echo(f"  - {warning['field']}: {warning['message']}")
    if not report["errors"] and not report["warnings"]:
        click.echo("\nNo problems found.")

    if report["errors"]:
        sys.exit(1)


if __name__ == "__main__":
    cli()
