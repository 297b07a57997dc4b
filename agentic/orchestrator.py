"""The three-step pipeline: request to plan, plan to command, command to output."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import httpx
from termcolor import colored

from agentic.agents import CoderAgent, PlannerAgent
from agentic.pipeline import PipelineResult
from agentic.shell_runner import ExecutionError, ExecutionSuccess, ShellRunner


@dataclass
class PipelineSettings:
    """Models, server and output mode used by the pipeline."""

    planner_model: str = "phi4"
    coder_model: str = "codellama"
    fallback_model: str = "gemma3"
    ollama_host: str = "http://localhost:11434"
    timeout_seconds: int = 30
    streaming: bool = True


class WarpPipeline:
    """Plans a request, turns the plan into a command and runs it after confirmation."""

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        *,
        client: httpx.Client | None = None,
        confirm: Callable[[str], str] = input,
    ) -> None:
        self.settings = settings if settings is not None else PipelineSettings()
        if client is None:
            client = httpx.Client(timeout=float(self.settings.timeout_seconds))
        self.planner = PlannerAgent(
            client,
            self.settings.ollama_host,
            self.settings.planner_model,
            self.settings.fallback_model,
        )
        self.coder = CoderAgent(
            client,
            self.settings.ollama_host,
            self.settings.coder_model,
            self.settings.fallback_model,
        )
        self.runner = ShellRunner(streaming=self.settings.streaming)
        self._confirm = confirm

    def _plan_and_code(self, request: str, suffix: str) -> tuple[str, str]:
        print(f"🧠 {colored('Planning...', 'cyan')}{suffix}")
        plan = self.planner.generate_plan(request)
        print(f"📝 {colored('Plan', 'green', attrs=['bold'])}: {colored(plan, 'cyan')}")

        print(f"\n💻 {colored('Translating to shell...', 'cyan')}{suffix}")
        command = self.coder.generate_command(plan)
        print(
            f"🔧 {colored('Suggested Command', 'green', attrs=['bold'])}: "
            f"{colored(command, 'yellow')}"
        )
        return plan, command

    def _confirmed(self) -> bool:
        try:
            answer = self._confirm("\n❓ Execute this command? (y/N): ")
        except EOFError:
            return False
        return answer.strip().lower().startswith("y")

    def execute(self, request: str) -> PipelineResult:
        """Run the whole pipeline; the result is cancelled if the user declines."""
        plan, command = self._plan_and_code(request, "")

        if not self._confirmed():
            return PipelineResult(
                original_input=request, plan=plan, command=command, cancelled=True
            )

        print(f"\n🚀 {colored('Running Command...', 'cyan')}")
        result = self.runner.execute(command)

        if isinstance(result, ExecutionSuccess):
            print(f"✅ {colored('Output', 'green', attrs=['bold'])}:")
            if result.stdout:
                print(result.stdout)
            if result.stderr:
                print(f"⚠️ {colored('Warnings', 'yellow')}:")
                print(colored(result.stderr, "yellow"))
            print(f"\n⚡ Completed in {result.duration:.2f}s")
        elif isinstance(result, ExecutionError):
            print(
                f"❌ {colored('Error', 'red', attrs=['bold'])} "
                f"(exit code: {result.exit_code}):"
            )
            print(colored(result.stderr, "red"))
            print(f"\n💥 Failed after {result.duration:.2f}s")

        return PipelineResult(
            original_input=request,
            plan=plan,
            command=command,
            execution_result=result,
            cancelled=False,
        )

    def dry_run(self, request: str) -> tuple[str, str]:
        """Plan and translate a request without running anything."""
        return self._plan_and_code(request, " (dry run)")