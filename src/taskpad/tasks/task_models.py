# src/taskpad/tasks/task_models.py

from __future__ import annotations

import logging
import random
import re
import uuid
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 500

# Trimmed from title edges: space separators, line terminators and the BOM.
# Control characters \x1c-\x1f and \x85 stay part of the title.
_TITLE_EDGE_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_UUID4_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


class FilterType(StrEnum):
    """Which subset of tasks the list shows."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class ValidationErrorKind(StrEnum):
    # title
    INVALID_TITLE = "invalid_title"
    EMPTY_TITLE = "empty_title"
    TITLE_TOO_LONG = "title_too_long"
    # single task
    NOT_AN_OBJECT = "not_an_object"
    MISSING_ID = "missing_id"
    INVALID_ID = "invalid_id"
    INVALID_COMPLETED_FLAG = "invalid_completed_flag"
    # collection
    NOT_AN_ARRAY = "not_an_array"
    INVALID_TASK_AT_INDEX = "invalid_task_at_index"
    # filter
    INVALID_FILTER = "invalid_filter"


class TaskValidationError(ValueError):
    """
    Validation failure tagged with a kind.

    Callers branch on `kind`; `str(err)` is the user-facing message.
    """

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class TaskCollectionError(TaskValidationError):
    """First invalid element of a task collection, with its position."""

    def __init__(self, index: int, cause: TaskValidationError) -> None:
        super().__init__(
            ValidationErrorKind.INVALID_TASK_AT_INDEX,
            f"Invalid task at index {index}: {cause.message}",
        )
        self.index = index
        self.cause = cause


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def generate_id() -> str:
    """
    Return a fresh UUID v4 string.

    uuid4() draws from os.urandom; if the platform has no OS random source
    we fall back to the `random` module with the same v4 bit layout.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.warning("OS random source unavailable; using pseudo-random task ids.")
        return str(uuid.UUID(int=random.getrandbits(128), version=4))


def is_valid_uuid4(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return _UUID4_RE.fullmatch(value) is not None


def validate_title(title: Any) -> str:
    """Return the trimmed title or raise TaskValidationError."""
    if not isinstance(title, str):
        raise TaskValidationError(
            ValidationErrorKind.INVALID_TITLE, "Task title must be a string"
        )

    trimmed = title.strip(_TITLE_EDGE_CHARS)

    if not trimmed:
        raise TaskValidationError(ValidationErrorKind.EMPTY_TITLE, "Task title cannot be empty")

    if len(trimmed) > MAX_TITLE_LENGTH:
        raise TaskValidationError(
            ValidationErrorKind.TITLE_TOO_LONG,
            f"Task title cannot exceed {MAX_TITLE_LENGTH} characters",
        )

    return trimmed


def create_task(title: Any) -> Task:
    return Task(id=generate_id(), title=validate_title(title), completed=False)


def validate_task(candidate: Any) -> bool:
    """
    Check one task in persisted (dict) or model form.

    Checks run in a fixed order and the first failure wins:
    shape, id presence, id format, title, completed flag.
    """
    if isinstance(candidate, Task):
        candidate = candidate.to_dict()

    if not isinstance(candidate, Mapping):
        raise TaskValidationError(ValidationErrorKind.NOT_AN_OBJECT, "Task must be an object")

    task_id = candidate.get("id")
    if not task_id or not isinstance(task_id, str):
        raise TaskValidationError(ValidationErrorKind.MISSING_ID, "Task must have a valid id")

    if not is_valid_uuid4(task_id):
        raise TaskValidationError(ValidationErrorKind.INVALID_ID, "Task id must be a valid UUID")

    validate_title(candidate.get("title"))

    # bool is checked by type: 0/1 from a hand-edited file are not accepted.
    if not isinstance(candidate.get("completed"), bool):
        raise TaskValidationError(
            ValidationErrorKind.INVALID_COMPLETED_FLAG,
            "Task completed status must be a boolean",
        )

    return True


def validate_task_collection(candidates: Any) -> bool:
    if not isinstance(candidates, (list, tuple)):
        raise TaskValidationError(ValidationErrorKind.NOT_AN_ARRAY, "Tasks must be an array")

    for index, candidate in enumerate(candidates):
        try:
            validate_task(candidate)
        except TaskValidationError as e:
            raise TaskCollectionError(index, e) from e

    return True


def validate_filter(value: Any) -> bool:
    if not isinstance(value, str) or value not in {f.value for f in FilterType}:
        accepted = ", ".join(f.value for f in FilterType)
        raise TaskValidationError(
            ValidationErrorKind.INVALID_FILTER, f"Filter must be one of: {accepted}"
        )
    return True


def task_from_dict(data: Mapping[str, Any]) -> Task:
    """Build a Task from an already validated dict."""
    return Task(id=str(data["id"]), title=str(data["title"]), completed=bool(data["completed"]))
