"""Reading project files into ``TileSetupConfiguration``.

Every failure, whether the file is missing, the JSON is malformed or the
schema rejects a value, surfaces as one ``ConfigError`` carrying a list of
``ConfigIssue`` entries. Issue paths use JSON notation (``area.width``,
``masks[2].radius``) and issues inside a mask also name the mask's id when
the file gives one.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tilesetup.application.config.schema import TileSetupConfiguration


class ConfigErrorKind(str, Enum):
    FILE_NOT_FOUND = "file_not_found"
    FILE_READ_ERROR = "file_read_error"
    JSON_PARSE = "json_parse"
    VALIDATION = "validation"


@dataclass(frozen=True)
class ConfigIssue:
    """One problem found in a project file.

    Attributes:
        path: JSON path of the offending value; empty for syntax errors.
        message: What is wrong.
        value: The rejected input, when it is a scalar.
        mask_id: Id of the enclosing mask for paths under ``masks``.
        line: 1-based line of a JSON syntax error.
        column: 1-based column of a JSON syntax error.
    """

    path: str
    message: str
    value: Any = None
    mask_id: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def section(self) -> str:
        """Top-level key of the path (``area``, ``tile``, ``masks``...)."""
        return self.path.split(".", 1)[0].split("[", 1)[0]

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}, column {self.column}: {self.message}"
        where = self.path
        if self.mask_id is not None:
            where = f"{where} (mask '{self.mask_id}')"
        if self.value is None:
            return f"{where}: {self.message}"
        return f"{where}: {self.message} (got: {self.value!r})"


class ConfigError(Exception):
    """A project file that cannot be turned into a configuration."""

    def __init__(
        self,
        kind: ConfigErrorKind,
        message: str,
        path: Path | None = None,
        issues: list[ConfigIssue] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.path = path
        self.issues = issues or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# Tags the discriminated mask union inserts into error locations.
_MASK_TAGS = frozenset({"rectangle", "circle", "polygon"})


def _issue_path(loc: tuple[str | int, ...]) -> str:
    """JSON path for a pydantic location, without discriminator tags.

    >>> _issue_path(("masks", 0, "circle", "radius"))
    'masks[0].radius'
    """
    path = ""
    for index, segment in enumerate(loc):
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif index == 2 and loc[0] == "masks" and segment in _MASK_TAGS:
            continue
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _mask_id(data: Any, loc: tuple[str | int, ...]) -> str | None:
    if len(loc) < 2 or loc[0] != "masks" or not isinstance(loc[1], int):
        return None
    try:
        mask_id = data["masks"][loc[1]]["id"]
    except (KeyError, IndexError, TypeError):
        return None
    return mask_id if isinstance(mask_id, str) else None


def _schema_issues(data: Any, error: PydanticValidationError) -> list[ConfigIssue]:
    issues = []
    for err in error.errors():
        value = err.get("input")
        issues.append(
            ConfigIssue(
                path=_issue_path(err["loc"]),
                message=err["msg"],
                value=None if isinstance(value, (dict, list)) else value,
                mask_id=_mask_id(data, err["loc"]),
            )
        )
    return issues


def _parse(data: Any, source: Path | None) -> TileSetupConfiguration:
    try:
        return TileSetupConfiguration.model_validate(data)
    except PydanticValidationError as e:
        issues = _schema_issues(data, e)
        message = "\n  - ".join(["Configuration validation failed:", *map(str, issues)])
        raise ConfigError(ConfigErrorKind.VALIDATION, message, source, issues) from e


def load_config(path: Path) -> TileSetupConfiguration:
    """Load and validate a project file.

    Raises:
        ConfigError: With ``kind`` telling missing files, unreadable files,
            JSON syntax errors and schema errors apart.
    """
    if not path.exists():
        raise ConfigError(ConfigErrorKind.FILE_NOT_FOUND, f"Config file not found: {path}", path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        issue = ConfigIssue(path="", message=e.msg, line=e.lineno, column=e.colno)
        raise ConfigError(
            ConfigErrorKind.JSON_PARSE, f"Invalid JSON in {path}: {issue}", path, [issue]
        ) from e
    except OSError as e:
        raise ConfigError(
            ConfigErrorKind.FILE_READ_ERROR, f"Cannot read config file {path}: {e}", path
        ) from e

    return _parse(data, path)


def load_config_from_dict(data: dict[str, Any]) -> TileSetupConfiguration:
    """Validate an already-decoded project, e.g. a request body.

    Raises:
        ConfigError: If the data fails schema validation.
    """
    return _parse(data, None)
