import io
import json

import pytest

from jenkinsmcp.prompts import register_default_prompts
from jenkinsmcp.server import Server


def _run(*requests):
    lines = "".join(json.dumps(r) + "\n" for r in requests)
    writer = io.StringIO()
    server = Server("jenkins-cli", "dev", "test", reader=io.StringIO(lines), writer=writer)
    register_default_prompts(server)
    server.start()
    return [json.loads(line) for line in writer.getvalue().splitlines()]


def _get(name, arguments):
    [reply] = _run(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "prompts/get",
            "params": {"name": name, "arguments": arguments},
        }
    )
    return reply


def test_prompts_list_contains_all_templates():
    [reply] = _run({"jsonrpc": "2.0", "id": 1, "method": "prompts/list"})
    names = {p["name"] for p in reply["result"]["prompts"]}
    assert names == {
        "diagnose_build_failure",
        "review_job_config",
        "summarize_build_history",
        "validate_jenkinsfile",
    }


def test_prompts_list_marks_required_arguments():
    [reply] = _run({"jsonrpc": "2.0", "id": 1, "method": "prompts/list"})
    by_name = {p["name"]: p for p in reply["result"]["prompts"]}
    args = {a["name"]: a for a in by_name["diagnose_build_failure"]["arguments"]}
    assert args["job"]["required"] is True
    assert "required" not in args["number"]


def test_diagnose_with_number():
    result = _get("diagnose_build_failure", {"job": "my-job", "number": "42"})["result"]
    assert result["description"] == "Diagnose build failure for my-job"
    message = result["messages"][0]
    assert message["role"] == "user"
    assert message["content"]["type"] == "text"
    assert message["content"]["text"].startswith(
        "Diagnose the failure of build #42 for Jenkins job 'my-job'."
    )


def test_diagnose_defaults_to_last_build():
    result = _get("diagnose_build_failure", {"job": "my-job"})["result"]
    assert "the last build" in result["messages"][0]["content"]["text"]


@pytest.mark.parametrize(
    "name", ["diagnose_build_failure", "review_job_config", "summarize_build_history"]
)
def test_missing_job_is_an_error(name):
    reply = _get(name, {})
    assert reply["error"]["code"] == -32603
    assert "missing required argument: job" in reply["error"]["message"]


def test_review_mentions_config_resource():
    result = _get("review_job_config", {"job": "folder/app"})["result"]
    assert result["description"] == "Review job configuration for folder/app"
    assert "jenkins:///folder/app/config.xml" in result["messages"][0]["content"]["text"]


def test_summarize_default_limit():
    result = _get("summarize_build_history", {"job": "app"})["result"]
    assert "build_list with limit=10" in result["messages"][0]["content"]["text"]


def test_summarize_custom_limit():
    result = _get("summarize_build_history", {"job": "app", "limit": "25"})["result"]
    assert result["description"] == "Summarize build history for app"
    assert "build_list with limit=25" in result["messages"][0]["content"]["text"]


def test_validate_embeds_jenkinsfile():
    content = "pipeline { agent any }"
    result = _get("validate_jenkinsfile", {"jenkinsfile": content})["result"]
    assert result["description"] == "Validate and review Jenkinsfile"
    text = result["messages"][0]["content"]["text"]
    assert f"Validate and review the following Jenkinsfile:\n\n{content}\n\n" in text


def test_validate_requires_jenkinsfile():
    reply = _get("validate_jenkinsfile", {})
    assert "missing required argument: jenkinsfile" in reply["error"]["message"]