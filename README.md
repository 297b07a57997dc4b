# agentic

`agentic` is a library. It takes a request written in plain language, turns it
into a shell command and runs that command. Two agents do the translation:

- `PlannerAgent` turns the request into a short plan.
- `CoderAgent` turns the plan into a command.

Both agents call a local Ollama server at `/api/generate`. Each one tries its
primary model first and then its fallback model. If neither model answers, it
uses built-in keyword patterns instead (`fallback_plan`, `fallback_command`).

A `ShellRunner` executes the command. It can stream output as the command
produces it, apply a timeout, run in a chosen directory, and refuse commands
that look dangerous.

The package also includes:

- a manager for YAML workflow files, with search, tags, favourites and
  `{{placeholder}}` substitution;
- state helpers for terminal interfaces: a virtual scroller, easing
  animations, dirty-region tracking, a filtering command palette with a
  spinner, and light and dark colour themes.

## Configuration

`agentic.config.AgenticConfig` holds the settings that are kept in a TOML
file. `config_path()` returns `.agentic.toml` if that file exists in the
current directory. Otherwise it returns `~/.agentic/agentic.toml`.

`AgenticConfig.load(path)` reads the file. If the file does not exist, it
writes the default settings there and returns them. A file that is missing a
field, or that has a value of the wrong type, raises `ValueError`.

```toml
[warp.models]
planner = "phi4"
coder = "codellama"
fallback = "gemma3"
ollama_host = "http://localhost:11434"
timeout_seconds = 30

[warp.execution]
streaming = true
auto_confirm = false
max_execution_time = 300

[warp.safety]
enable_safety_checks = true
require_confirmation = true
dangerous_commands = ["rm -rf /", "shutdown", "reboot"]
allowed_directories = ["~/", "./", "/tmp/"]
```

```python
from agentic.config import AgenticConfig, config_path, create_sample_config

config = AgenticConfig.load(config_path())
config.is_dangerous_command("sudo shutdown now")   # True
config.is_directory_allowed("./src")               # True
config.working_directory()                         # None unless set
config.save()                                      # writes back to config_path()

create_sample_config()                             # writes .agentic.toml.sample
```

## Running commands

`ShellRunner.execute` runs a command through `bash -c`, or through
`powershell -Command` on Windows. It returns one of two results:

- `ExecutionSuccess(stdout, stderr, duration)` when the exit status is 0;
- `ExecutionError(stderr, exit_code, duration)` otherwise.

`duration` is in seconds.

When `streaming` is true, which is the default, output lines are echoed as
they arrive, with stderr shown in yellow.

The runner also has these methods:

- `execute_with_timeout(command, timeout)` kills the command and raises
  `ShellRunnerError` once the timeout runs out.
- `execute_in_dir(command, directory)` changes into `directory` first and
  collects the output.
- `execute_safely(command)` raises `DangerousCommandError` for any command
  that matches one of the runner's built-in dangerous patterns.

```python
from agentic.shell_runner import DangerousCommandError, ShellRunner

runner = ShellRunner(streaming=False)
result = runner.execute("echo hello")
print(result.stdout)                   # hello

try:
    runner.execute_safely("rm -rf /")
except DangerousCommandError as exc:
    print(exc)
```

## The pipeline

`agentic.orchestrator.WarpPipeline` connects the two agents and the runner.
It takes its settings from a `PipelineSettings` object: the models, the
Ollama host, the timeout and the streaming mode. It does not read the TOML
configuration file.

You may also pass an `httpx.Client` of your own, and a `confirm` callable. By
default `confirm` is `input`.

- `dry_run(request)` prints the plan and the suggested command, then returns
  `(plan, command)` without running anything.
- `execute(request)` asks `Execute this command? (y/N)` and runs the command
  only if the answer starts with `y`. It returns a `PipelineResult`, which is
  marked `cancelled` when the user declines.

```python
from agentic.orchestrator import PipelineSettings, WarpPipeline
from agentic.pipeline import PipelineStats

pipeline = WarpPipeline(PipelineSettings(streaming=False))
plan, command = pipeline.dry_run("show running docker containers")

stats = PipelineStats()
result = pipeline.execute("run the tests")
stats.update(result)
print(result.summary(), stats.success_rate())
```

`PipelineResult` provides `is_success()`, `exit_code()`, `output()`,
`error()`, `execution_duration()` and `summary()`. `PipelineStats` counts
successful, failed and cancelled runs and keeps the average duration.

## Workflows

A workflow is a `.yaml` or `.yml` file. It must have a `name`, a `command`
and a `description`. It may also have `tags`, `arguments`, `shells`,
`author`, `author_url` and `source_url`. Placeholders in the command are
written `{{name}}`.

```yaml
name: Clone with SSH
command: git clone git@{{host}}:{{repository}}.git
description: Clone a repository over SSH
tags: [git]
arguments:
  - name: host
    description: Git host
    default_value: example.com
  - name: repository
    description: Repository path
    required: true
```

`WorkflowManager` looks in the directories `workflows` and
`~/.agentic/workflows` by default. The `~` in the second path is not
expanded. You can pass your own list of directories, or add more with
`add_workflow_directory`.

Loading searches subdirectories as well. A file's id is its file name
without the extension, taken relative to the directory the file is in. Files
that cannot be read or parsed are skipped.

```python
from agentic.workflows import WorkflowManager

manager = WorkflowManager(["my-workflows"])
manager.load_workflows()

manager.search_workflows("clone")
manager.get_workflows_by_tag("git")
manager.add_favorite("clone_with_ssh")
manager.execute_workflow("clone_with_ssh", {"repository": "team/project"})
# 'git clone git@example.com:team/project.git'
```

An unknown id raises `WorkflowNotFoundError`. A required argument that has
neither a value nor a default raises `MissingArgumentError`. This applies
both to `execute_workflow` and to `validate_workflow_args`.

`get_workflow_suggestions` returns at most ten matches.

## Interface helpers

These classes hold state only. They do not draw anything.

- `agentic.performance` provides:
  - `PerformanceManager`: frame limiting, dirty regions, and trimming of
    history and output;
  - `VirtualScroller`;
  - `AnimationSystem` with the `EasingFunction` curves;
  - `OptimizedTextRenderer`: simple ANSI highlighting for `rust`, `bash` or
    `shell`, and `json`.
- `agentic.palette` provides `CommandPalette` and `spinner_frame`.
- `agentic.styles` provides `AppTheme`.

```python
from agentic.palette import CommandPalette, spinner_frame
from agentic.performance import VirtualScroller
from agentic.styles import AppTheme

palette = CommandPalette()
palette.toggle()
palette.update_filter("git")
palette.move_selection(1)
palette.selected_suggestion()      # "git add ."
spinner_frame(250)                 # "⠹"

scroller = VirtualScroller(viewport_height=10, item_height=4)
scroller.update_total_items(20)
scroller.scroll_down(5)
scroller.visible_range()           # (5, 7)

AppTheme.for_mode(True).style("accent")   # "cyan"
```

## What it does not do

- There is no command-line program and no full-screen terminal interface.
  You use the package from Python.
- There is no storage of command history, tasks or other records.
- The pipeline does not use the safety settings in the TOML file. Only
  `ShellRunner.execute_safely` checks commands, and it uses its own fixed
  list of patterns.