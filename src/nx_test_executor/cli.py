"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from nx_test_executor.artifact_scraping import ScrapeError
from nx_test_executor.command_running import SetupError
from nx_test_executor.configuration import ConfigurationError, load_runner_config
from nx_test_executor.dependency_install import DependencyInstallError
from nx_test_executor.execution_request import (
    ExecutionRequestError,
    ExecutionValidationError,
    read_execution_request,
)
from nx_test_executor.run_execution import RunExecutionError, create_runner

_QUIET_LIBRARY_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="nx-test-executor")
def cli() -> None:
    """Nx test executor: run an nx target and report its JUnit results."""


@cli.command(name="run")
@click.argument("execution", type=str)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log every pipeline stage to stderr.",
)
def run_execution(execution: str, verbose: bool) -> None:
    """Run one execution given as inline JSON or a path to a YAML/JSON document."""
    _configure_logging(verbose)
    try:
        runner = create_runner(load_runner_config())
    except (ConfigurationError, ScrapeError) as exc:
        raise CliError(f"could not initialize runner: {exc}") from exc
    try:
        request = read_execution_request(execution)
        result = runner.run(request)
    except (
        ExecutionRequestError,
        ExecutionValidationError,
        RunExecutionError,
        DependencyInstallError,
        SetupError,
    ) as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps({"type": "result", "result": result.to_document()}))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(json.dumps({"type": "error", "content": str(exc)}), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
    )
    for name in _QUIET_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
