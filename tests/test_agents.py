import json

import httpx

from agentic.agents import CoderAgent, PlannerAgent

HOST = "http://ollama.test"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def _recording_handler(replies, seen):
    def handler(request):
        body = json.loads(request.content)
        seen.append(body)
        reply = replies.get(body["model"])
        if reply is None:
            return httpx.Response(500)
        return httpx.Response(200, json={"response": reply})

    return handler


def test_planner_uses_primary_model_and_strips():
    seen = []
    client = _client(_recording_handler({"primary": "  Do the thing \n"}, seen))
    agent = PlannerAgent(client, HOST, "primary", "backup")
    assert agent.generate_plan("do it") == "Do the thing"
    assert [body["model"] for body in seen] == ["primary"]
    assert seen[0]["stream"] is False
    assert seen[0]["prompt"].endswith("User Request: do it\nPlan:")


def test_planner_posts_to_generate_endpoint():
    urls = []

    def handler(request):
        urls.append(str(request.url))
        return httpx.Response(200, json={"response": "ok"})

    agent = PlannerAgent(_client(handler), HOST, "primary", "backup")
    agent.generate_plan("x")
    assert urls == [f"{HOST}/api/generate"]


def test_planner_falls_back_to_second_model():
    seen = []
    client = _client(_recording_handler({"backup": "Backup plan"}, seen))
    agent = PlannerAgent(client, HOST, "primary", "backup")
    assert agent.generate_plan("anything") == "Backup plan"
    assert [body["model"] for body in seen] == ["primary", "backup"]


def test_planner_uses_keyword_plan_when_models_fail():
    seen = []
    client = _client(_recording_handler({}, seen))
    agent = PlannerAgent(client, HOST, "primary", "backup")
    assert agent.generate_plan("create a React app") == (
        "Create a new React application with modern tooling and start development server"
    )
    assert len(seen) == 2


def test_planner_handles_connection_errors():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    agent = PlannerAgent(_client(handler), HOST, "primary", "backup")
    assert agent.generate_plan("frobnicate") == "Execute the requested operation: frobnicate"


def test_malformed_response_counts_as_failure():
    def handler(request):
        return httpx.Response(200, json={"other": "field"})

    agent = PlannerAgent(_client(handler), HOST, "primary", "backup")
    assert agent.generate_plan("backup my files") == (
        "Create a backup of the specified data or files"
    )


def test_fallback_plan_keywords():
    agent = PlannerAgent(_client(lambda r: httpx.Response(500)), HOST, "a", "b")
    assert agent.fallback_plan("list docker container") == (
        "List and inspect Docker containers with their current status"
    )
    assert agent.fallback_plan("make a git repo") == (
        "Initialize or manage Git repository with version control operations"
    )
    assert agent.fallback_plan("install numpy") == (
        "Install the specified software package or dependency"
    )
    assert agent.fallback_plan("test it") == (
        "Run tests for the current project or specified component"
    )


def test_coder_prompt_and_primary_answer():
    seen = []
    client = _client(_recording_handler({"coder": "ls -la\n"}, seen))
    agent = CoderAgent(client, HOST, "coder", "backup")
    assert agent.generate_command("List files") == "ls -la"
    assert seen[0]["prompt"].endswith("Plan: List files\nCommand:")


def test_coder_keyword_fallbacks():
    agent = CoderAgent(_client(lambda r: httpx.Response(503)), HOST, "a", "b")
    assert agent.generate_command("Inspect docker container state") == "docker ps -a"
    assert agent.fallback_command("run the build") == "npm run build"
    assert agent.fallback_command("run npm install") == "npm install"
    assert agent.fallback_command("backup the database") == (
        "mysqldump -u root -p mydb > backup.sql"
    )
    assert agent.fallback_command("say hi") == "echo 'Executing: say hi'"