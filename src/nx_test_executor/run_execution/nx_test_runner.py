"""Nx test execution use-case service."""

from __future__ import annotations

import logging

from nx_test_executor.artifact_scraping import ObjectStoreScraper, Scraper, scrape_artifacts
from nx_test_executor.command_running import (
    ProcessRunner,
    SubprocessProcessRunner,
    build_env_overrides,
    build_nx_command,
    check_command_tokens,
)
from nx_test_executor.configuration import RunnerConfig, describe_runner_config
from nx_test_executor.dependency_install import install_dependencies
from nx_test_executor.execution_request import (
    ExecutionRequest,
    resolve_run_path,
    validate_execution,
)
from nx_test_executor.execution_results import ExecutionResult
from nx_test_executor.report_mapping import (
    ReportParseError,
    map_junit_to_execution_result,
    parse_junit_report,
)
from nx_test_executor.variable_resolution import SecretEnvManager, VariableManager

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when an execution cannot start."""


class DataDirNotFoundError(RunExecutionError):
    """The configured data directory does not exist."""


class NxTestRunner:
    """Runs one nx target against a checked-out repository and maps its JUnit report.

    Errors raised before the task runner starts propagate to the caller. Errors after
    that point are attached to the returned result.
    """

    def __init__(
        self,
        config: RunnerConfig,
        *,
        process_runner: ProcessRunner,
        variable_manager: VariableManager,
        scraper: Scraper | None = None,
    ) -> None:
        if config.scraper_enabled and scraper is None:
            raise ValueError("a scraper is required when artifact scraping is enabled")
        self._config = config
        self._process_runner = process_runner
        self._variable_manager = variable_manager
        self._scraper = scraper

    @property
    def config(self) -> RunnerConfig:
        return self._config

    def run(self, request: ExecutionRequest) -> ExecutionResult:
        logger.debug("start: validate execution")
        repository = validate_execution(request)
        logger.debug("end: validate execution")

        logger.debug("start: checking if data dir exists")
        datadir = self._config.datadir
        if datadir is None:
            raise DataDirNotFoundError("data dir not found: RUNNER_DATADIR is not set")
        if not datadir.is_dir():
            raise DataDirNotFoundError(f"data dir not found: {datadir}")
        logger.debug("end: checking if data dir exists")

        env_overrides = build_env_overrides(request.envs)
        run_path = resolve_run_path(datadir, repository)

        resolved = self._variable_manager.resolve(request.variables)
        command = build_nx_command(
            nx_binary=self._config.nx_binary,
            nx_command=self._config.nx_command,
            nx_project=self._config.nx_project,
            assignments=resolved.as_assignments(),
            args=request.args,
        )
        check_command_tokens(command)

        logger.debug("start: installing local dependencies")
        install_dependencies(
            run_path,
            dependency_manager=self._config.dependency_manager,
            env_overrides=env_overrides,
            process_runner=self._process_runner,
        )
        logger.debug("end: installing local dependencies")

        logger.debug("start: running nx target")
        try:
            outcome = self._process_runner.run(run_path, command, env_overrides)
        except OSError as exc:
            logger.warning("running %s failed: %s", command.program, exc)
            return ExecutionResult.from_error(f"running nx: {exc}")
        logger.debug("end: running nx target (exit code %d)", outcome.exit_code)

        output = self._variable_manager.obfuscate(outcome.output)
        parse_error: ReportParseError | None = None
        try:
            suites = parse_junit_report(output)
        except ReportParseError as exc:
            logger.warning("could not read JUnit report: %s", exc)
            parse_error = exc
            suites = ()
        result = map_junit_to_execution_result(
            output, suites, status_from_steps=self._config.status_from_steps
        )

        if self._config.scraper_enabled and self._scraper is not None:
            result = scrape_artifacts(
                result,
                execution_id=request.id,
                run_path=run_path,
                scraper=self._scraper,
            )

        return result.with_errors(parse_error)


def create_runner(config: RunnerConfig) -> NxTestRunner:
    """Wire the runner with the real process runner, secret manager and scraper."""
    logger.debug("runner configuration: %s", describe_runner_config(config))
    scraper = ObjectStoreScraper(config) if config.scraper_enabled else None
    return NxTestRunner(
        config,
        process_runner=SubprocessProcessRunner(),
        variable_manager=SecretEnvManager(),
        scraper=scraper,
    )
