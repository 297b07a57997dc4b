"""Configuration for the natural-language command pipeline, stored as TOML."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

CONFIG_FILE_NAME = ".agentic.toml"
SAMPLE_FILE_NAME = ".agentic.toml.sample"

DEFAULT_DANGEROUS_COMMANDS = (
    "rm -rf /",
    "del /s /q c:",
    "format c:",
    "shutdown",
    "reboot",
    "dd if=",
    "mkfs.",
    "> /dev/",
    "chmod 777 /",
    "chown root /",
)

DEFAULT_ALLOWED_DIRECTORIES = ("~/", "./", "/tmp/", "C:\\temp\\")

_SAMPLE_CONFIG = r'''# Agentic CLI configuration
# Settings for the pipeline that turns natural language into shell commands.

[warp.models]
# Model that turns a request into a structured plan
planner = "phi4"

# Model that turns a plan into shell commands
coder = "codellama"

# Model used when a primary model fails
fallback = "gemma3"

# Ollama server
ollama_host = "http://localhost:11434"
timeout_seconds = 30

[warp.execution]
# Show command output as it is produced
streaming = true

# Run commands without asking first (only for trusted environments)
auto_confirm = false

# Maximum execution time in seconds
max_execution_time = 300

# Working directory for command execution (optional)
# working_directory = "/path/to/project"

[warp.safety]
# Check commands against the dangerous patterns below
enable_safety_checks = true

# Ask before executing commands
require_confirmation = true

# Command patterns that are refused
dangerous_commands = [
    "rm -rf /",
    "del /s /q c:",
    "format c:",
    "shutdown",
    "reboot"
]

# Directories commands may run in (empty = no restrictions)
allowed_directories = [
    "~/",
    "./",
    "/tmp/",
    "C:\\temp\\"
]
'''


def _field(table: dict[str, Any], key: str, kind: type, section: str) -> Any:
    try:
        value = table[key]
    except KeyError:
        raise ValueError(f"missing field `{key}` in [{section}]") from None
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    elif kind is list:
        valid = isinstance(value, list) and all(isinstance(item, str) for item in value)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"invalid type for field `{key}` in [{section}]")
    return value


def _table(data: dict[str, Any], key: str, section: str) -> dict[str, Any]:
    return _field(data, key, dict, section)


@dataclass
class ModelConfig:
    """Models used by the planning and coding agents."""

    planner: str = "phi4"
    coder: str = "codellama"
    fallback: str = "gemma3"
    ollama_host: str = "http://localhost:11434"
    timeout_seconds: int = 30

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> ModelConfig:
        section = "warp.models"
        return cls(
            planner=_field(table, "planner", str, section),
            coder=_field(table, "coder", str, section),
            fallback=_field(table, "fallback", str, section),
            ollama_host=_field(table, "ollama_host", str, section),
            timeout_seconds=_field(table, "timeout_seconds", int, section),
        )


@dataclass
class ExecutionConfig:
    """How generated commands are run."""

    streaming: bool = True
    auto_confirm: bool = False
    max_execution_time: int = 300
    working_directory: str | None = None

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> ExecutionConfig:
        section = "warp.execution"
        working_directory = table.get("working_directory")
        if working_directory is not None and not isinstance(working_directory, str):
            raise ValueError(f"invalid type for field `working_directory` in [{section}]")
        return cls(
            streaming=_field(table, "streaming", bool, section),
            auto_confirm=_field(table, "auto_confirm", bool, section),
            max_execution_time=_field(table, "max_execution_time", int, section),
            working_directory=working_directory,
        )


@dataclass
class SafetyConfig:
    """Rules that guard against destructive commands."""

    enable_safety_checks: bool = True
    dangerous_commands: list[str] = field(
        default_factory=lambda: list(DEFAULT_DANGEROUS_COMMANDS)
    )
    require_confirmation: bool = True
    allowed_directories: list[str] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_DIRECTORIES)
    )

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> SafetyConfig:
        section = "warp.safety"
        return cls(
            enable_safety_checks=_field(table, "enable_safety_checks", bool, section),
            dangerous_commands=list(_field(table, "dangerous_commands", list, section)),
            require_confirmation=_field(table, "require_confirmation", bool, section),
            allowed_directories=list(_field(table, "allowed_directories", list, section)),
        )


@dataclass
class WarpConfig:
    """The pipeline section of the configuration."""

    models: ModelConfig = field(default_factory=ModelConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    safety: SafetyConfig = field(default_factory=SafetyConfig)


def _path_components(path: str) -> list[str]:
    parts: list[str] = []
    if path.startswith("/"):
        parts.append("/")
    for index, segment in enumerate(path.split("/")):
        if not segment:
            continue
        if segment == ".":
            if index == 0:
                parts.append(".")
            continue
        parts.append(segment)
    return parts


def _path_starts_with(path: str, prefix: str) -> bool:
    base = _path_components(prefix)
    return _path_components(path)[: len(base)] == base


def config_path() -> Path:
    """Return the config file: ./.agentic.toml if present, else ~/.agentic/agentic.toml."""
    local = Path(CONFIG_FILE_NAME)
    if local.exists():
        return local
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".agentic" / "agentic.toml"


@dataclass
class AgenticConfig:
    """Top-level configuration file contents."""

    warp: WarpConfig = field(default_factory=WarpConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgenticConfig:
        """Build a configuration from parsed TOML; raise ValueError on missing fields."""
        warp = _table(data, "warp", "root")
        return cls(
            warp=WarpConfig(
                models=ModelConfig._from_table(_table(warp, "models", "warp")),
                execution=ExecutionConfig._from_table(_table(warp, "execution", "warp")),
                safety=SafetyConfig._from_table(_table(warp, "safety", "warp")),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        models = self.warp.models
        execution = self.warp.execution
        safety = self.warp.safety
        execution_table: dict[str, Any] = {
            "streaming": execution.streaming,
            "auto_confirm": execution.auto_confirm,
            "max_execution_time": execution.max_execution_time,
        }
        if execution.working_directory is not None:
            execution_table["working_directory"] = execution.working_directory
        return {
            "warp": {
                "models": {
                    "planner": models.planner,
                    "coder": models.coder,
                    "fallback": models.fallback,
                    "ollama_host": models.ollama_host,
                    "timeout_seconds": models.timeout_seconds,
                },
                "execution": execution_table,
                "safety": {
                    "enable_safety_checks": safety.enable_safety_checks,
                    "dangerous_commands": list(safety.dangerous_commands),
                    "require_confirmation": safety.require_confirmation,
                    "allowed_directories": list(safety.allowed_directories),
                },
            }
        }

    @classmethod
    def load(cls, path: str | Path | None = None) -> AgenticConfig:
        """Load the config file, writing the defaults there when it does not exist."""
        target = Path(path) if path is not None else config_path()
        if target.exists():
            with target.open("rb") as handle:
                return cls.from_dict(tomllib.load(handle))
        config = cls()
        config.save(target)
        return config

    def save(self, path: str | Path | None = None) -> Path:
        """Write the configuration as TOML and return the path written."""
        target = Path(path) if path is not None else config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")
        return target

    def is_dangerous_command(self, command: str) -> bool:
        if not self.warp.safety.enable_safety_checks:
            return False
        lowered = command.lower()
        return any(pattern.lower() in lowered for pattern in self.warp.safety.dangerous_commands)

    def is_directory_allowed(self, directory: str) -> bool:
        allowed = self.warp.safety.allowed_directories
        if not allowed:
            return True
        return any(
            _path_starts_with(directory, entry) or "*" in entry or directory.startswith(entry)
            for entry in allowed
        )

    def working_directory(self) -> Path | None:
        directory = self.warp.execution.working_directory
        return Path(directory) if directory is not None else None

    def auto_confirm_enabled(self) -> bool:
        return self.warp.execution.auto_confirm


def create_sample_config(path: str | Path = SAMPLE_FILE_NAME) -> Path:
    """Write an annotated sample configuration file and return its path."""
    target = Path(path)
    target.write_text(_SAMPLE_CONFIG, encoding="utf-8")
    print(f"Sample configuration created at: {target}")
    return target