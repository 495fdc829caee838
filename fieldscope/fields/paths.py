# FieldScope - Access Path Resolution
# ===================================
"""
Resolve dot/bracket access paths against loosely structured entity payloads.

Supported syntax:
    assignee.displayName        nested keys
    components[0].name          list index
    components[].name           every element (also components[*].name)
    labels[*]                   every element of a list

Resolution never raises on data problems; it returns a PathResult carrying
either the value or a PathError describing what went wrong.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

JsonValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]

_TOKEN_PATTERN = re.compile(r"([^.\[\]]+)|\[(\d*|\*)\]")


class ValueKind(str, Enum):
    """Typed variant tag for JSON leaf and container values."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    MAP = "map"
    NULL = "null"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        """Classify a decoded JSON value."""
        if value is None:
            return cls.NULL
        # bool before number: bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (list, tuple)):
            return cls.LIST
        if isinstance(value, dict):
            return cls.MAP
        return cls.STRING


class PathErrorReason(str, Enum):
    """Why a path could not be resolved."""
    INVALID_SYNTAX = "invalid_syntax"
    MISSING_KEY = "missing_key"
    NOT_AN_OBJECT = "not_an_object"
    NOT_A_LIST = "not_a_list"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


@dataclass
class PathError:
    """Resolution failure for one path."""
    path: str
    reason: PathErrorReason
    segment: str = ""

    @property
    def message(self) -> str:
        return f"Cannot resolve '{self.path}' at '{self.segment}': {self.reason.value}"


@dataclass
class PathToken:
    """One parsed path segment."""
    key: Optional[str] = None       # Object key
    index: Optional[int] = None     # List index
    wildcard: bool = False          # [] or [*]

    def __str__(self) -> str:
        if self.key is not None:
            return self.key
        if self.wildcard:
            return "[*]"
        return f"[{self.index}]"


@dataclass
class PathResult:
    """Value-or-error outcome of resolve_path()."""
    path: str
    value: JsonValue = None
    error: Optional[PathError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ValueKind]:
        return ValueKind.of(self.value) if self.ok else None


def parse_path(path: str) -> Optional[List[PathToken]]:
    """
    Split an access path into tokens.

    Returns:
        List of PathToken, or None if the path is syntactically invalid
    """
    if not isinstance(path, str) or not path.strip():
        return None

    tokens: List[PathToken] = []
    position = 0
    expect_key = True

    while position < len(path):
        if path[position] == ".":
            # Dots separate keys; a leading, doubled or trailing dot is invalid
            if expect_key or position + 1 >= len(path):
                return None
            position += 1
            expect_key = True
            continue

        match = _TOKEN_PATTERN.match(path, position)
        if not match:
            return None

        key, bracket = match.group(1), match.group(2)
        if key is not None:
            if not expect_key:
                return None
            tokens.append(PathToken(key=key))
        elif bracket in ("", "*"):
            if not tokens:
                return None
            tokens.append(PathToken(wildcard=True))
        else:
            if not tokens:
                return None
            tokens.append(PathToken(index=int(bracket)))

        expect_key = False
        position = match.end()

    return tokens or None


def resolve_path(payload: JsonValue, path: str) -> PathResult:
    """
    Resolve an access path against a payload.

    Wildcards fan out over list elements and collect the results into a list;
    elements that do not resolve are skipped.
    """
    tokens = parse_path(path)
    if tokens is None:
        return PathResult(path=path, error=PathError(path, PathErrorReason.INVALID_SYNTAX, str(path)))
    return _resolve(payload, tokens, path)


def _resolve(value: JsonValue, tokens: List[PathToken], path: str) -> PathResult:
    current = value
    for position, token in enumerate(tokens):
        if token.key is not None:
            if not isinstance(current, dict):
                return PathResult(path=path, error=PathError(path, PathErrorReason.NOT_AN_OBJECT, token.key))
            if token.key not in current:
                return PathResult(path=path, error=PathError(path, PathErrorReason.MISSING_KEY, token.key))
            current = current[token.key]
            continue

        if not isinstance(current, (list, tuple)):
            return PathResult(path=path, error=PathError(path, PathErrorReason.NOT_A_LIST, str(token)))

        if token.wildcard:
            rest = tokens[position + 1:]
            if not rest:
                return PathResult(path=path, value=list(current))
            collected = []
            for element in current:
                result = _resolve(element, rest, path)
                if result.ok:
                    collected.append(result.value)
            return PathResult(path=path, value=collected)

        if token.index >= len(current):
            return PathResult(path=path, error=PathError(path, PathErrorReason.INDEX_OUT_OF_RANGE, str(token)))
        current = current[token.index]

    return PathResult(path=path, value=current)
