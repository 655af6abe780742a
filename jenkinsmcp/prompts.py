"""Prompt templates that guide an assistant through common Jenkins tasks."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from .protocol import Prompt, PromptArgument, PromptGetResult, PromptMessage, new_text_content
from .server import Server

Step = Union[str, Tuple[str, Sequence[str]]]


def _render(intro: str, steps: Sequence[Step]) -> str:
    """Lay out an introduction followed by numbered steps with indented bullets."""
    lines = [intro, ""]
    for number, step in enumerate(steps, 1):
        head, bullets = (step, ()) if isinstance(step, str) else step
        lines.append(f"{number}. {head}")
        lines.extend(f"   - {bullet}" for bullet in bullets)
    return "\n".join(lines)


def _required(args: dict[str, str], name: str) -> str:
    value = args.get(name, "")
    if not value:
        raise ValueError(f"missing required argument: {name}")
    return value


def _user_prompt(description: str, text: str) -> PromptGetResult:
    return PromptGetResult(
        description=description,
        messages=[PromptMessage(role="user", content=new_text_content(text))],
    )


def _diagnose_text(build_ref: str, job: str) -> str:
    steps: list[Step] = [
        "First, use the build_view tool (or build_last if no number specified) "
        "to get the build details including status, duration, and timestamp.",
        "Use the build_log tool to retrieve the console output and identify the error.",
        "If it's a pipeline job, use pipeline_stages to see which stage failed, "
        "then pipeline_stage_log to get the specific stage output.",
        (
            "Check if the failure is:",
            [
                "A compilation/build error (check the error messages in the log)",
                "A test failure (look for test result summaries)",
                "An infrastructure issue (timeout, agent offline, out of disk space)",
                "A configuration problem (missing credentials, wrong parameters)",
            ],
        ),
        "Look at the build's changeset to see what code changes might have caused the failure.",
        "Compare with previous successful builds if needed using build_list.",
        ("Provide a summary of:", ["What failed and why", "The root cause", "Suggested fix"]),
    ]
    intro = f"Diagnose the failure of {build_ref} for Jenkins job '{job}'. Follow these steps:"
    return _render(intro, steps)


def _review_text(job: str) -> str:
    steps: list[Step] = [
        "Use job_view to get the current job details (health, last build status, etc).",
        f"Read the job's config.xml via the jenkins:///{job}/config.xml resource.",
        (
            "Analyze the configuration for:",
            [
                "Build triggers: Are they appropriate? (SCM polling, webhooks, cron)",
                "Build parameters: Are they well-documented with sensible defaults?",
                "Source code management: Is the branch specifier correct?",
                "Build steps: Are they efficient and well-ordered?",
                "Post-build actions: Are notifications and artifact archiving configured?",
                "Pipeline syntax: If Jenkinsfile-based, is the pipeline well-structured?",
            ],
        ),
        (
            "Check for common issues:",
            [
                "Missing or hardcoded credentials (should use credential bindings)",
                "No timeout configured (builds could hang forever)",
                "No retry strategy for flaky steps",
                "Workspace cleanup not configured",
                "Missing error handling in pipeline scripts",
            ],
        ),
        "Provide recommendations for improvements.",
    ]
    intro = f"Review the configuration of Jenkins job '{job}'. Follow these steps:"
    return _render(intro, steps)


def _history_text(job: str, limit: str) -> str:
    steps: list[Step] = [
        f"Use build_list with limit={limit} to get recent builds.",
        "For each build, note the status (SUCCESS, FAILURE, UNSTABLE, ABORTED), "
        "duration, and timestamp.",
        (
            "Analyze patterns:",
            [
                "Success rate: What percentage of builds succeed?",
                "Failure patterns: Are failures clustered or sporadic?",
                "Duration trends: Are builds getting slower over time?",
                "Stability: How often does the build alternate between success and failure?",
            ],
        ),
        "If there are failures, use build_view on a few failed builds "
        "to understand common failure modes.",
        (
            "Provide a summary including:",
            [
                "Overall health score",
                "Success/failure rate",
                "Average build duration",
                "Any concerning trends",
                "Recommendations for improving stability",
            ],
        ),
    ]
    intro = f"Analyze the build history of Jenkins job '{job}'. Follow these steps:"
    return _render(intro, steps)


def _validate_text(jenkinsfile: str) -> str:
    steps: list[Step] = [
        "Use the pipeline_validate tool to check the syntax against the Jenkins server.",
        "If validation fails, identify and explain the syntax errors.",
        (
            "Review the pipeline for best practices:",
            [
                "Are stages well-defined and logically organized?",
                "Is error handling present (try/catch/finally)?",
                "Are credentials accessed securely (withCredentials)?",
                "Is there proper cleanup in post sections?",
                "Are timeouts set to prevent hanging builds?",
                "Are agents specified appropriately?",
                "Is parallelism used where beneficial?",
            ],
        ),
        (
            "Check for common anti-patterns:",
            [
                "Shell commands that could fail silently",
                "Missing 'script' blocks in declarative pipelines",
                "Hardcoded values that should be parameters",
                "Missing input validation for parameters",
            ],
        ),
        "Provide the validated/improved Jenkinsfile if changes are needed.",
    ]
    intro = "\n\n".join(
        [
            "Validate and review the following Jenkinsfile:",
            jenkinsfile,
            "Follow these steps:",
        ]
    )
    return _render(intro, steps)


def _handle_diagnose_build_failure(args: dict[str, str]) -> PromptGetResult:
    job = _required(args, "job")
    number = args.get("number", "")
    build_ref = f"build #{number}" if number else "the last build"
    return _user_prompt(f"Diagnose build failure for {job}", _diagnose_text(build_ref, job))


def _handle_review_job_config(args: dict[str, str]) -> PromptGetResult:
    job = _required(args, "job")
    return _user_prompt(f"Review job configuration for {job}", _review_text(job))


def _handle_summarize_build_history(args: dict[str, str]) -> PromptGetResult:
    job = _required(args, "job")
    limit = args.get("limit", "") or "10"
    return _user_prompt(f"Summarize build history for {job}", _history_text(job, limit))


def _handle_validate_jenkinsfile(args: dict[str, str]) -> PromptGetResult:
    jenkinsfile = _required(args, "jenkinsfile")
    return _user_prompt("Validate and review Jenkinsfile", _validate_text(jenkinsfile))


def register_default_prompts(server: Server) -> None:
    """Register every Jenkins prompt template with the server."""
    job_argument = PromptArgument(name="job", description="Job name or path", required=True)
    server.add_prompt(
        Prompt(
            name="diagnose_build_failure",
            description="Guide for diagnosing a failed Jenkins build",
            arguments=[
                job_argument,
                PromptArgument(
                    name="number",
                    description="Build number (defaults to last build)",
                    required=False,
                ),
            ],
        ),
        _handle_diagnose_build_failure,
    )
    server.add_prompt(
        Prompt(
            name="review_job_config",
            description="Guide for reviewing a Jenkins job configuration for best practices",
            arguments=[job_argument],
        ),
        _handle_review_job_config,
    )
    server.add_prompt(
        Prompt(
            name="summarize_build_history",
            description="Guide for analyzing build history trends of a job",
            arguments=[
                job_argument,
                PromptArgument(
                    name="limit",
                    description="Number of recent builds to analyze (default: 10)",
                    required=False,
                ),
            ],
        ),
        _handle_summarize_build_history,
    )
    server.add_prompt(
        Prompt(
            name="validate_jenkinsfile",
            description="Guide for validating and improving a Jenkinsfile",
            arguments=[
                PromptArgument(
                    name="jenkinsfile",
                    description="Jenkinsfile content to validate",
                    required=True,
                ),
            ],
        ),
        _handle_validate_jenkinsfile,
    )