import io
import json

from jenkinsmcp.output import (
    AuthenticationError,
    ErrorOutput,
    Format,
    JenkinsConnectionError,
    JenkinsPermissionError,
    NotFoundError,
    print_error,
    print_json,
    print_table,
    status_color,
)


def test_print_table():
    buf = io.StringIO()
    print_table(buf, ["NAME", "STATUS"], [["job-1", "SUCCESS"], ["job-2", "FAILURE"]])
    out = buf.getvalue()
    assert "NAME" in out
    assert "job-1" in out
    assert "job-2" in out


def test_print_table_alignment():
    buf = io.StringIO()
    print_table(buf, ["NAME", "STATUS"], [["job-1", "SUCCESS"], ["job-2", "FAILURE"]])
    assert buf.getvalue() == (
        "NAME   STATUS\n"
        "-      -  \n"
        "job-1  SUCCESS\n"
        "job-2  FAILURE\n"
    )


def test_print_table_columns_line_up():
    buf = io.StringIO()
    print_table(buf, ["A", "B", "C"], [["long-name", "x", "y"], ["s", "yy", "z"]])
    lines = buf.getvalue().splitlines()
    starts = {line.index("x") if "x" in line else line.index("yy") for line in lines[2:]}
    assert len(starts) == 1


def test_print_json():
    buf = io.StringIO()
    print_json(buf, {"key": "value"})
    out = buf.getvalue()
    assert '"key": "value"' in out
    assert out.endswith("\n")
    assert json.loads(out) == {"key": "value"}


def test_print_json_escapes_html():
    buf = io.StringIO()
    print_json(buf, {"a": "<b>&"})
    out = buf.getvalue()
    assert "\\u003cb\\u003e\\u0026" in out
    assert json.loads(out) == {"a": "<b>&"}


def test_status_color():
    for status in ["SUCCESS", "FAILURE", "UNSTABLE", "RUNNING", "unknown-status"]:
        assert status in status_color(status)


def test_status_color_codes():
    assert status_color("SUCCESS") == "\033[32mSUCCESS\033[0m"
    assert status_color("failed") == "\033[31mfailed\033[0m"
    assert status_color("unknown-status") == "unknown-status"


def _json_error(err):
    buf = io.StringIO()
    print_error(buf, err, Format.JSON)
    return json.loads(buf.getvalue())


def test_print_error_connection_error_json():
    err = JenkinsConnectionError(
        url="http://jenkins.example.com",
        cause=OSError("connection refused"),
        suggestions=["Check if Jenkins is running", "Verify the URL is correct"],
    )
    output = _json_error(err)
    assert output["error_code"] == "connection_error"
    assert "jenkins.example.com" in output["message"]
    assert output["details"]["url"] == "http://jenkins.example.com"
    assert output["details"]["cause"] == "connection refused"
    assert len(output["suggestions"]) == 2


def test_print_error_connection_error_table():
    err = JenkinsConnectionError(
        url="http://jenkins.example.com",
        cause=OSError("connection refused"),
        suggestions=["Check if Jenkins is running"],
    )
    buf = io.StringIO()
    print_error(buf, err, Format.TABLE)
    output = buf.getvalue()
    assert "Error:" in output
    assert "jenkins.example.com" in output
    assert "Suggestions:" in output


def test_print_error_authentication_error_json():
    err = AuthenticationError(
        url="http://jenkins.example.com",
        auth_method="basic",
        status_code=401,
        suggestions=[
            "Verify your username and password",
            "Try running 'jenkins config test'",
        ],
    )
    output = _json_error(err)
    assert output["error_code"] == "authentication_error"
    assert output["details"]["auth_method"] == "basic"
    assert output["details"]["status_code"] == "401"


def test_print_error_permission_error_json():
    err = JenkinsPermissionError(
        url="http://jenkins.example.com",
        permission="Overall/Read",
        user="anonymous",
        auth_method="none",
        suggestions=[
            "Configure authentication in Jenkins",
            "Run 'jenkins-cli configure' to set up credentials",
        ],
    )
    output = _json_error(err)
    assert output["error_code"] == "permission_error"
    assert output["details"]["user"] == "anonymous"
    assert output["details"]["permission"] == "Overall/Read"


def test_print_error_not_found_error_json():
    err = NotFoundError(
        resource_type="Job",
        resource_name="my-missing-job",
        url="http://jenkins.example.com/job/my-missing-job",
        suggestions=["my-other-job", "my-backup-job"],
    )
    output = _json_error(err)
    assert output["error_code"] == "not_found"
    assert output["details"]["resource_type"] == "Job"
    assert output["details"]["resource_name"] == "my-missing-job"
    assert len(output["suggestions"]) == 2


def test_print_error_wrapped_structured_error_is_found():
    inner = NotFoundError(resource_type="Job", resource_name="my-missing-job")
    try:
        try:
            raise inner
        except NotFoundError as exc:
            raise RuntimeError("lookup failed") from exc
    except RuntimeError as outer:
        output = _json_error(outer)
    assert output["error_code"] == "not_found"
    assert output["message"] == "Job 'my-missing-job' not found"


def test_print_error_generic_error_json():
    output = _json_error(RuntimeError("something went wrong"))
    assert output["error_code"] == "error"
    assert output["message"] == "something went wrong"
    assert "details" not in output


def test_print_error_generic_error_table():
    buf = io.StringIO()
    print_error(buf, RuntimeError("something went wrong"), Format.TABLE)
    output = buf.getvalue()
    assert "Error:" in output
    assert "something went wrong" in output


def test_print_error_nil():
    buf = io.StringIO()
    print_error(buf, None, Format.JSON)
    assert buf.getvalue() == ""


def test_error_output_to_dict_omits_empty():
    assert ErrorOutput(error_code="error", message="m").to_dict() == {
        "error_code": "error",
        "message": "m",
    }