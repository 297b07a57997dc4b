"""Language-model agents that turn requests into plans and plans into commands."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

PLANNER_PROMPT = """You are a planning agent that converts natural language requests into clear, structured plans.

Your role:
1. Analyze the user's request and understand their intent
2. Break down complex requests into logical steps
3. Identify the tools, technologies, and actions needed
4. Output a concise plan in plain English

Guidelines:
- Be specific about what needs to be done
- Include key details like project names, technologies, or configurations
- Keep plans actionable and clear
- Focus on the "what" rather than the "how"

Examples:
Input: "create a new React app and start the dev server"
Output: "Create a new React project using Vite, install dependencies, and start the development server"

Input: "show me all running Docker containers and their status"
Output: "List all currently running Docker containers with their status information"

Input: "backup my database and compress it"
Output: "Create a database backup, compress the backup file, and save it to a secure location"
"""

CODER_PROMPT = """You are a coding agent that converts structured plans into precise shell commands.

Your role:
1. Translate plans into executable shell commands
2. Use modern, cross-platform tools when possible
3. Chain commands efficiently with && or ;
4. Ensure commands are safe and follow best practices
5. Output ONLY the command(s), no explanations

Guidelines:
- Use modern tools (npm/yarn, git, docker, etc.)
- Prefer single-line command chains when logical
- Include necessary flags and options
- Use safe defaults and common conventions
- Work on Windows (PowerShell/CMD), macOS, and Linux

Examples:
Plan: "Create a new React project using Vite, install dependencies, and start the development server"
Command: npm create vite@latest my-react-app --template react && cd my-react-app && npm install && npm run dev

Plan: "List all currently running Docker containers with their status information"
Command: docker ps -a --format "table {{.Names}}\\t{{.Status}}\\t{{.Ports}}"

Plan: "Create a database backup, compress the backup file, and save it to a secure location"
Command: mysqldump -u root -p mydb > backup.sql && gzip backup.sql && mv backup.sql.gz ~/backups/
"""


class OllamaError(Exception):
    """The Ollama server could not be reached or gave an unusable answer."""


class _OllamaAgent:
    def __init__(
        self,
        client: httpx.Client | None,
        ollama_host: str,
        model: str,
        fallback_model: str,
    ) -> None:
        self.client = client if client is not None else httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS)
        self.ollama_host = ollama_host
        self.model = model
        self.fallback_model = fallback_model

    def _query_model(self, model: str, prompt: str) -> str:
        payload = {"model": model, "prompt": prompt, "stream": False}
        try:
            response = self.client.post(f"{self.ollama_host}/api/generate", json=payload)
        except httpx.HTTPError as exc:
            raise OllamaError(str(exc)) from exc
        if not response.is_success:
            raise OllamaError(
                f"Ollama API error: {response.status_code} {response.reason_phrase}"
            )
        try:
            text = response.json()["response"]
        except (ValueError, KeyError, TypeError) as exc:
            raise OllamaError(f"Malformed Ollama response: {exc}") from exc
        if not isinstance(text, str):
            raise OllamaError("Malformed Ollama response: 'response' is not a string")
        return text

    def _ask(self, prompt: str, fallback: Callable[[], str]) -> str:
        try:
            return self._query_model(self.model, prompt).strip()
        except OllamaError:
            logger.warning(
                "Primary model %s failed, trying fallback %s", self.model, self.fallback_model
            )
        try:
            return self._query_model(self.fallback_model, prompt).strip()
        except OllamaError:
            return fallback()


class PlannerAgent(_OllamaAgent):
    """Turns a natural-language request into a short plan."""

    def generate_plan(self, text: str) -> str:
        prompt = f"{PLANNER_PROMPT}\n\nUser Request: {text}\nPlan:"
        return self._ask(prompt, lambda: self.fallback_plan(text))

    def fallback_plan(self, text: str) -> str:
        """A keyword-based plan used when no model answers."""
        lowered = text.lower()
        if "react" in lowered and "app" in lowered:
            return "Create a new React application with modern tooling and start development server"
        if "docker" in lowered and "container" in lowered:
            return "List and inspect Docker containers with their current status"
        if "git" in lowered and "repo" in lowered:
            return "Initialize or manage Git repository with version control operations"
        if "install" in lowered:
            return "Install the specified software package or dependency"
        if "backup" in lowered:
            return "Create a backup of the specified data or files"
        if "test" in lowered:
            return "Run tests for the current project or specified component"
        return f"Execute the requested operation: {text}"


class CoderAgent(_OllamaAgent):
    """Turns a plan into a shell command."""

    def generate_command(self, plan: str) -> str:
        prompt = f"{CODER_PROMPT}\n\nPlan: {plan}\nCommand:"
        return self._ask(prompt, lambda: self.fallback_command(plan))

    def fallback_command(self, plan: str) -> str:
        """A keyword-based command used when no model answers."""
        lowered = plan.lower()
        if "react" in lowered and "vite" in lowered:
            return "npm create vite@latest my-app --template react && cd my-app && npm install && npm run dev"
        if "docker" in lowered and "container" in lowered:
            return "docker ps -a"
        if "git" in lowered and "repo" in lowered:
            return "git init && git add . && git commit -m 'Initial commit'"
        if "install" in lowered and "npm" in lowered:
            return "npm install"
        if "backup" in lowered and "database" in lowered:
            return "mysqldump -u root -p mydb > backup.sql"
        if "test" in lowered:
            return "npm test"
        if "build" in lowered:
            return "npm run build"
        return f"echo 'Executing: {plan}'"