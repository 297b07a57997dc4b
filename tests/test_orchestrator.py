import json

import httpx

from agentic.orchestrator import PipelineSettings, WarpPipeline
from agentic.shell_runner import ExecutionError, ExecutionSuccess

PLAN = "Print a greeting"


def _client(command, seen=None):
    def handler(request):
        body = json.loads(request.content)
        if seen is not None:
            seen.append(body["model"])
        replies = {"phi4": PLAN, "codellama": command}
        return httpx.Response(200, json={"response": replies[body["model"]]})

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_default_settings():
    settings = PipelineSettings()
    assert settings.planner_model == "phi4"
    assert settings.coder_model == "codellama"
    assert settings.fallback_model == "gemma3"
    assert settings.ollama_host == "http://localhost:11434"
    assert settings.timeout_seconds == 30
    assert settings.streaming is True


def test_dry_run_returns_plan_and_command(capsys):
    seen = []
    pipeline = WarpPipeline(client=_client("echo hi", seen))
    assert pipeline.dry_run("greet me") == (PLAN, "echo hi")
    assert seen == ["phi4", "codellama"]
    assert "(dry run)" in capsys.readouterr().out


def test_declined_execution_is_cancelled():
    prompts = []

    def confirm(prompt):
        prompts.append(prompt)
        return "n"

    pipeline = WarpPipeline(client=_client("echo hello"), confirm=confirm)
    result = pipeline.execute("greet me")
    assert result.cancelled is True
    assert result.execution_result is None
    assert result.plan == PLAN
    assert result.command == "echo hello"
    assert len(prompts) == 1


def test_end_of_input_cancels():
    def confirm(prompt):
        raise EOFError

    pipeline = WarpPipeline(client=_client("echo hello"), confirm=confirm)
    assert pipeline.execute("greet me").cancelled is True


def test_confirmed_execution_runs_command():
    settings = PipelineSettings(streaming=False)
    pipeline = WarpPipeline(settings, client=_client("echo hello"), confirm=lambda p: "Yes")
    result = pipeline.execute("greet me")
    assert result.cancelled is False
    assert isinstance(result.execution_result, ExecutionSuccess)
    assert result.output().strip() == "hello"
    assert result.original_input == "greet me"
    assert result.is_success() is True


def test_failing_command_reports_exit_code(capsys):
    pipeline = WarpPipeline(client=_client("exit 3"), confirm=lambda p: "y")
    result = pipeline.execute("fail please")
    assert isinstance(result.execution_result, ExecutionError)
    assert result.exit_code() == 3
    assert result.is_success() is False
    assert "exit code: 3" in capsys.readouterr().out