"""Reusable command templates loaded from YAML files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = ("yaml", "yml")
MAX_SUGGESTIONS = 10


def _required_str(data: Mapping[str, Any], key: str, what: str) -> str:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}` in {what}") from None
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}` in {what}")
    return value


def _optional_str(data: Mapping[str, Any], key: str, what: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}` in {what}")
    return value


def _str_list(data: Mapping[str, Any], key: str, what: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"invalid type for field `{key}` in {what}")
    return list(value)


def _placeholder(name: str) -> str:
    return "{{" + name + "}}"


@dataclass
class WorkflowArgument:
    """A named placeholder in a workflow command."""

    name: str
    description: str
    default_value: str | None = None
    required: bool = False

    @classmethod
    def _from_dict(cls, data: Any) -> WorkflowArgument:
        what = "workflow argument"
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid {what}: expected a mapping")
        required = data.get("required", False)
        if not isinstance(required, bool):
            raise ValueError(f"invalid type for field `required` in {what}")
        return cls(
            name=_required_str(data, "name", what),
            description=_required_str(data, "description", what),
            default_value=_optional_str(data, "default_value", what),
            required=required,
        )


@dataclass
class Workflow:
    """A command template with its description, tags and arguments."""

    name: str
    command: str
    description: str
    tags: list[str] = field(default_factory=list)
    arguments: list[WorkflowArgument] = field(default_factory=list)
    author: str | None = None
    author_url: str | None = None
    source_url: str | None = None
    shells: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Workflow:
        """Build a workflow from parsed YAML; raise ValueError on bad or missing fields."""
        what = "workflow"
        if not isinstance(data, Mapping):
            raise ValueError(f"invalid {what}: expected a mapping")
        raw_arguments = data.get("arguments")
        if raw_arguments is None:
            raw_arguments = []
        if not isinstance(raw_arguments, list):
            raise ValueError(f"invalid type for field `arguments` in {what}")
        return cls(
            name=_required_str(data, "name", what),
            command=_required_str(data, "command", what),
            description=_required_str(data, "description", what),
            tags=_str_list(data, "tags", what),
            arguments=[WorkflowArgument._from_dict(item) for item in raw_arguments],
            author=_optional_str(data, "author", what),
            author_url=_optional_str(data, "author_url", what),
            source_url=_optional_str(data, "source_url", what),
            shells=_str_list(data, "shells", what),
        )


class WorkflowNotFoundError(LookupError):
    """No workflow is loaded under the requested id."""


class MissingArgumentError(ValueError):
    """A required workflow argument was neither given nor defaulted."""


class WorkflowManager:
    """Loads workflows from directories and looks them up, filters and fills them in."""

    def __init__(self, directories: list[str | Path] | None = None) -> None:
        self.workflows: dict[str, Workflow] = {}
        if directories is None:
            self.workflow_directories = [Path("workflows"), Path("~/.agentic/workflows")]
        else:
            self.workflow_directories = [Path(directory) for directory in directories]
        self.favorites: list[str] = []

    def add_workflow_directory(self, path: str | Path) -> None:
        self.workflow_directories.append(Path(path))

    def load_workflows(self) -> None:
        """Load every YAML workflow found under the existing workflow directories."""
        for directory in list(self.workflow_directories):
            if directory.exists():
                self._load_from_directory(directory)

    def reload_workflows(self) -> None:
        self.workflows.clear()
        self.load_workflows()

    def _load_from_directory(self, directory: Path) -> None:
        for path in directory.iterdir():
            if path.is_dir():
                self._load_from_directory(path)
            elif path.suffix[1:] in YAML_SUFFIXES:
                try:
                    workflow = self._load_file(path)
                except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError):
                    continue
                self.workflows[self._workflow_id(path, directory)] = workflow

    @staticmethod
    def _load_file(path: Path) -> Workflow:
        return Workflow.from_dict(yaml.safe_load(path.read_text(encoding="utf-8")))

    @staticmethod
    def _workflow_id(file_path: Path, base_dir: Path) -> str:
        try:
            relative = file_path.relative_to(base_dir)
        except ValueError:
            return file_path.stem or "unknown"
        text = str(relative)
        dot = text.rfind(".")
        if dot != -1:
            text = text[:dot]
        return text.replace("\\", "/")

    def get_workflow(self, workflow_id: str) -> Workflow | None:
        return self.workflows.get(workflow_id)

    def list_workflows(self) -> list[tuple[str, Workflow]]:
        return list(self.workflows.items())

    def search_workflows(self, query: str) -> list[tuple[str, Workflow]]:
        """Workflows whose id, name, description or a tag contains the query, ignoring case."""
        needle = query.lower()
        return [
            (workflow_id, workflow)
            for workflow_id, workflow in self.workflows.items()
            if needle in workflow_id.lower()
            or needle in workflow.name.lower()
            or needle in workflow.description.lower()
            or any(needle in tag.lower() for tag in workflow.tags)
        ]

    def get_workflows_by_tag(self, tag: str) -> list[tuple[str, Workflow]]:
        return [
            (workflow_id, workflow)
            for workflow_id, workflow in self.workflows.items()
            if tag in workflow.tags
        ]

    def get_workflow_categories(self) -> dict[str, list[tuple[str, Workflow]]]:
        """Group workflows by tag; a workflow appears once under each of its tags."""
        categories: dict[str, list[tuple[str, Workflow]]] = {}
        for workflow_id, workflow in self.workflows.items():
            for tag in workflow.tags:
                categories.setdefault(tag, []).append((workflow_id, workflow))
        return categories

    def add_favorite(self, workflow_id: str) -> None:
        if workflow_id not in self.favorites:
            self.favorites.append(workflow_id)

    def remove_favorite(self, workflow_id: str) -> None:
        self.favorites = [favorite for favorite in self.favorites if favorite != workflow_id]

    def get_favorites(self) -> list[tuple[str, Workflow]]:
        """Favourite workflows that are currently loaded, in the order they were added."""
        return [
            (workflow_id, self.workflows[workflow_id])
            for workflow_id in self.favorites
            if workflow_id in self.workflows
        ]

    def is_favorite(self, workflow_id: str) -> bool:
        return workflow_id in self.favorites

    def _require(self, workflow_id: str) -> Workflow:
        workflow = self.get_workflow(workflow_id)
        if workflow is None:
            raise WorkflowNotFoundError(f"Workflow '{workflow_id}' not found")
        return workflow

    def execute_workflow(
        self, workflow_id: str, args: Mapping[str, str] | None = None
    ) -> str:
        """Return the workflow's command with {{name}} placeholders filled in."""
        workflow = self._require(workflow_id)
        command = workflow.command
        for key, value in (args or {}).items():
            command = command.replace(_placeholder(key), value)
        for argument in workflow.arguments:
            placeholder = _placeholder(argument.name)
            if placeholder not in command:
                continue
            if argument.default_value is not None:
                command = command.replace(placeholder, argument.default_value)
            elif argument.required:
                raise MissingArgumentError(
                    f"Required argument '{argument.name}' not provided "
                    f"for workflow '{workflow_id}'"
                )
        return command

    def validate_workflow_args(
        self, workflow_id: str, args: Mapping[str, str] | None = None
    ) -> None:
        """Raise MissingArgumentError if a required argument without default is absent."""
        workflow = self._require(workflow_id)
        given = args or {}
        for argument in workflow.arguments:
            if argument.required and argument.name not in given and argument.default_value is None:
                raise MissingArgumentError(
                    f"Required argument '{argument.name}' missing for workflow '{workflow_id}'"
                )

    def get_workflow_suggestions(self, partial_input: str) -> list[tuple[str, Workflow]]:
        """Up to ten workflows whose id starts with, or name contains, the input."""
        partial = partial_input.lower()
        matches = (
            (workflow_id, workflow)
            for workflow_id, workflow in self.workflows.items()
            if workflow_id.lower().startswith(partial) or partial in workflow.name.lower()
        )
        return [match for _, match in zip(range(MAX_SUGGESTIONS), matches)]