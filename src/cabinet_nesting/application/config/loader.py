"""Loading of nesting configuration files.

Every failure, from a missing file to a schema violation, surfaces as a
``ConfigError`` whose ``error_type`` tells the CLI and the REST API how to
present it.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_nesting.application.config.schema import NestingConfiguration


class ConfigError(Exception):
    """A nesting configuration could not be loaded.

    Attributes:
        message: The primary error message
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation
        path: Source file, None for configurations passed as dictionaries
        details: Per-problem entries; ``line``/``column`` for JSON syntax
            errors, ``path``/``message``/``value`` for validation errors
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location the way it appears in the file.

    >>> _json_path(("panels", 0, "width"))
    'panels[0].width'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _describe(detail: dict[str, Any]) -> str:
    where = detail["path"] or "(root)"
    value = detail.get("value")
    if value is None or isinstance(value, (dict, list)):
        return f"  - {where}: {detail['message']}"
    return f"  - {where}: {detail['message']} (got: {value!r})"


def _validate(data: Any, path: Path | None = None) -> NestingConfiguration:
    try:
        return NestingConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
        message = "\n".join(
            ["Configuration validation failed:", *(_describe(d) for d in details)]
        )
        raise ConfigError(message, "validation", path, details) from e


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file: {path}: {e}", "file_read_error", path
        ) from e


def load_config(path: Path) -> NestingConfiguration:
    """Read, parse and validate a JSON nesting configuration.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the schema.
    """
    content = _read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> NestingConfiguration:
    """Validate a configuration that arrived as a dictionary (REST bodies).

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
