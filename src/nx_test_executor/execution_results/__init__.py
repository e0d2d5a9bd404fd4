"""Execution result exports."""

from .result_models import TEXT_OUTPUT_TYPE, ExecutionResult, ExecutionStatus, StepResult

__all__ = ["ExecutionResult", "ExecutionStatus", "StepResult", "TEXT_OUTPUT_TYPE"]
