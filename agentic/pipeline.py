"""Results and running statistics of the request-to-command pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from agentic.shell_runner import ExecutionError, ExecutionResult, ExecutionSuccess


@dataclass
class PipelineResult:
    """Outcome of one request: the plan, the command and what running it produced."""

    original_input: str
    plan: str
    command: str
    execution_result: ExecutionResult | None = None
    cancelled: bool = False

    def is_success(self) -> bool:
        if self.cancelled:
            return False
        return isinstance(self.execution_result, ExecutionSuccess)

    def execution_duration(self) -> float | None:
        """Seconds the command ran for, or None when it was not run."""
        if self.execution_result is None:
            return None
        return self.execution_result.duration

    def output(self) -> str | None:
        """Standard output of a successful command."""
        if isinstance(self.execution_result, ExecutionSuccess):
            return self.execution_result.stdout
        return None

    def error(self) -> str | None:
        """Standard error of a failed command, or of a successful one that wrote any."""
        result = self.execution_result
        if isinstance(result, ExecutionError):
            return result.stderr
        if isinstance(result, ExecutionSuccess) and result.stderr:
            return result.stderr
        return None

    def exit_code(self) -> int | None:
        result = self.execution_result
        if isinstance(result, ExecutionSuccess):
            return 0
        if isinstance(result, ExecutionError):
            return result.exit_code
        return None

    def summary(self) -> str:
        if self.cancelled:
            return "Pipeline cancelled by user"
        result = self.execution_result
        if isinstance(result, ExecutionSuccess):
            return f"✅ Command executed successfully in {result.duration:.2f}s"
        if isinstance(result, ExecutionError):
            return (
                f"❌ Command failed with exit code {result.exit_code} "
                f"after {result.duration:.2f}s"
            )
        return "⚠️ Command was not executed"


@dataclass
class PipelineStats:
    """Counts and average duration over many pipeline results."""

    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    cancelled_executions: int = 0
    average_duration: float = 0.0
    most_common_commands: list[tuple[str, int]] = field(default_factory=list)

    def update(self, result: PipelineResult) -> None:
        self.total_executions += 1
        if result.cancelled:
            self.cancelled_executions += 1
        elif result.is_success():
            self.successful_executions += 1
        else:
            self.failed_executions += 1

        duration = result.execution_duration()
        if duration is not None:
            total_time = self.average_duration * (self.total_executions - 1)
            self.average_duration = (total_time + duration) / self.total_executions

    def success_rate(self) -> float:
        """Percentage of executions that succeeded."""
        if self.total_executions == 0:
            return 0.0
        return self.successful_executions / self.total_executions * 100.0