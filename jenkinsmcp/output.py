"""Table, JSON, status colour and error rendering for command output."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, TextIO

from .protocol import to_wire

_PADDING = 2
_RESET = "\033[0m"

_STATUS_COLORS = {
    "\033[32m": ("success", "stable", "blue"),
    "\033[31m": ("failure", "failed", "red"),
    "\033[33m": ("unstable", "yellow", "in_progress"),
    "\033[90m": ("aborted", "grey", "disabled", "notbuilt", "not_built", "not_executed"),
    "\033[36m": ("running", "building"),
}
_COLOR_BY_STATUS = {name: code for code, names in _STATUS_COLORS.items() for name in names}


class Format(str, enum.Enum):
    TABLE = "table"
    JSON = "json"


def _suggestion_block(suggestions: Sequence[str]) -> str:
    if not suggestions:
        return ""
    lines = "".join(f"\n  - {s}" for s in suggestions)
    return f"\n\nSuggestions:{lines}"


def _with_cause(message: str, cause: BaseException | None) -> str:
    return f"{message}: {cause}" if cause is not None else message


@dataclass(eq=False)
class JenkinsConnectionError(Exception):
    """The Jenkins server could not be reached."""

    url: str = ""
    cause: BaseException | None = None
    suggestions: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        message = _with_cause(f"failed to connect to Jenkins at {self.url}", self.cause)
        return message + _suggestion_block(self.suggestions)


@dataclass(eq=False)
class AuthenticationError(Exception):
    """The server rejected the supplied credentials."""

    url: str = ""
    auth_method: str = ""
    status_code: int = 0
    cause: BaseException | None = None
    suggestions: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        message = f"authentication failed using {self.auth_method} method"
        if self.status_code > 0:
            message += f" (HTTP {self.status_code})"
        return _with_cause(message, self.cause) + _suggestion_block(self.suggestions)


@dataclass(eq=False)
class JenkinsPermissionError(Exception):
    """The authenticated user lacks a permission."""

    url: str = ""
    permission: str = ""
    user: str = ""
    auth_method: str = ""
    cause: BaseException | None = None
    suggestions: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.user:
            message = f"user '{self.user}' is missing {self.permission} permission"
        else:
            message = f"missing {self.permission} permission"
        return _with_cause(message, self.cause) + _suggestion_block(self.suggestions)


@dataclass(eq=False)
class NotFoundError(Exception):
    """A requested Jenkins resource does not exist."""

    resource_type: str = ""
    resource_name: str = ""
    url: str = ""
    cause: BaseException | None = None
    suggestions: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.resource_type:
            message = f"{self.resource_type} '{self.resource_name}' not found"
        else:
            message = f"'{self.resource_name}' not found"
        return _with_cause(message, self.cause) + _suggestion_block(self.suggestions)


_STRUCTURED = (JenkinsConnectionError, AuthenticationError, JenkinsPermissionError, NotFoundError)


@dataclass
class ErrorOutput:
    """A structured error as written in JSON output."""

    error_code: str
    message: str
    details: dict[str, str] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"error_code": self.error_code, "message": self.message}
        if self.details:
            out["details"] = dict(self.details)
        if self.suggestions:
            out["suggestions"] = list(self.suggestions)
        return out


def _cells(line: str) -> list[str]:
    return line.split("\t")


def _emit(lines: Iterable[list[str]], widths: list[int], out: list[str]) -> None:
    for cells in lines:
        padded = (
            cell.ljust(widths[col]) if col < len(widths) else cell
            for col, cell in enumerate(cells)
        )
        out.append("".join(padded))


def _align(lines: list[list[str]], start: int, end: int, column: int,
           widths: list[int], out: list[str]) -> None:
    """Lay out tab-terminated cells in elastic columns, block by block."""
    pending = start
    row = start
    while row < end:
        if column >= len(lines[row]) - 1:
            row += 1
            continue
        _emit(lines[pending:row], widths, out)
        block_end = row
        while block_end < end and column < len(lines[block_end]) - 1:
            block_end += 1
        width = max(len(cells[column]) + _PADDING for cells in lines[row:block_end])
        _align(lines, row, block_end, column + 1, widths + [width], out)
        pending = row = block_end
    _emit(lines[pending:end], widths, out)


def print_table(stream: TextIO, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
    """Write headers, a dash separator and rows as space-aligned columns."""
    raw = ["\t".join(headers), "-\t" * len(headers)]
    raw.extend("\t".join(row) for row in rows)
    lines = [_cells(line) for line in raw]
    out: list[str] = []
    _align(lines, 0, len(lines), 0, [], out)
    stream.write("".join(f"{line}\n" for line in out))


def print_json(stream: TextIO, value: Any) -> None:
    """Write a value as two-space indented JSON followed by a newline."""
    text = json.dumps(to_wire(value), indent=2, ensure_ascii=False)
    for char, escaped in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026"),
                          ("\u2028", "\\u2028"), ("\u2029", "\\u2029")):
        text = text.replace(char, escaped)
    stream.write(text + "\n")


def status_color(status: str) -> str:
    """Wrap a build or job status in the ANSI colour that matches it."""
    code = _COLOR_BY_STATUS.get(status.lower())
    return f"{code}{status}{_RESET}" if code else status


def _find_structured(err: BaseException) -> BaseException | None:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, _STRUCTURED):
            return current
        seen.add(id(current))
        current = current.__cause__
    return None


def _error_output(err: BaseException) -> ErrorOutput:
    found = _find_structured(err)
    output = ErrorOutput(error_code="error", message=str(err))
    details = output.details

    if isinstance(found, JenkinsConnectionError):
        output.error_code = "connection_error"
        output.message = f"Failed to connect to Jenkins at {found.url}"
        details["url"] = found.url
        if found.cause is not None:
            details["cause"] = str(found.cause)
        output.suggestions = list(found.suggestions)
    elif isinstance(found, AuthenticationError):
        output.error_code = "authentication_error"
        output.message = f"Authentication failed using {found.auth_method} method"
        details["auth_method"] = found.auth_method
        if found.url:
            details["url"] = found.url
        if found.status_code > 0:
            details["status_code"] = str(found.status_code)
        if found.cause is not None:
            details["cause"] = str(found.cause)
        output.suggestions = list(found.suggestions)
    elif isinstance(found, JenkinsPermissionError):
        output.error_code = "permission_error"
        if found.user:
            output.message = f"User '{found.user}' is missing {found.permission} permission"
            details["user"] = found.user
        else:
            output.message = f"Missing {found.permission} permission"
        if found.permission:
            details["permission"] = found.permission
        if found.url:
            details["url"] = found.url
        if found.auth_method:
            details["auth_method"] = found.auth_method
        if found.cause is not None:
            details["cause"] = str(found.cause)
        output.suggestions = list(found.suggestions)
    elif isinstance(found, NotFoundError):
        output.error_code = "not_found"
        if found.resource_type and found.resource_name:
            output.message = f"{found.resource_type} '{found.resource_name}' not found"
            details["resource_type"] = found.resource_type
            details["resource_name"] = found.resource_name
        elif found.resource_name:
            output.message = f"'{found.resource_name}' not found"
            details["resource_name"] = found.resource_name
        if found.url:
            details["url"] = found.url
        if found.cause is not None:
            details["cause"] = str(found.cause)
        output.suggestions = list(found.suggestions)
    return output


def print_error(stream: TextIO, err: BaseException | None, output_format: Format | str) -> None:
    """Write an error as a structured JSON object or a red-prefixed line."""
    if err is None:
        return
    if Format(output_format) is Format.JSON:
        print_json(stream, _error_output(err).to_dict())
        return
    shown = _find_structured(err) or err
    stream.write(f"\033[31mError:\033[0m {shown}\n")