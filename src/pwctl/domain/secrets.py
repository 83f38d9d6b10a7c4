"""Secret record representations — flat key/value and structured YAML.

Both shapes keep the password on the first line of the rendered content:

Flat::

    s3cr3t
    username: alice
    url: https://example.com
    free-form notes are kept verbatim

Structured (produced from templates)::

    s3cr3t
    ---
    username: alice
    recovery:
      - code-1
      - code-2

Fields are set through :meth:`Secret.set`; setting ``password`` addresses
the password slot. Structured records refuse to overwrite nested values.
"""

from __future__ import annotations

import re
from io import StringIO
from typing import Any, Protocol

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from pwctl.domain.errors import SecretFieldError, SecretParseError

YAML_SEPARATOR = "---"
PASSWORD_KEY = "password"
_FIELD_LINE = re.compile(r"^([^:\s][^:]*?):\s?(.*)$")


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a new instance per call keeps a
    failed dump from leaking broken emitter state into later operations.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def _check_key(key: str) -> str:
    key = key.strip()
    if not key or "\n" in key or ":" in key:
        msg = f"invalid field name: {key!r}"
        raise SecretFieldError(msg, key=key)
    return key


def _check_value(key: str, value: str) -> str:
    if "\n" in value:
        msg = f"value for field {key!r} must be a single line"
        raise SecretFieldError(msg, key=key)
    return value


class Secret(Protocol):
    """Contract shared by flat and structured secret records."""

    kind: str

    @property
    def password(self) -> str: ...

    def set_password(self, password: str) -> None: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def keys(self) -> list[str]: ...

    def render(self) -> str: ...


class FlatSecret:
    """Password line plus ``key: value`` fields and a free-form body."""

    kind = "flat"

    def __init__(
        self,
        password: str = "",
        fields: dict[str, str] | None = None,
        body: str = "",
    ) -> None:
        self._password = password
        self._fields: dict[str, str] = dict(fields or {})
        self.body = body

    @classmethod
    def parse(cls, content: str) -> FlatSecret:
        lines = content.splitlines()
        if not lines:
            return cls()
        fields: dict[str, str] = {}
        body: list[str] = []
        for line in lines[1:]:
            match = _FIELD_LINE.match(line)
            if match and not body:
                fields[match.group(1)] = match.group(2)
            else:
                body.append(line)
        return cls(lines[0], fields, "\n".join(body))

    @property
    def password(self) -> str:
        return self._password

    def set_password(self, password: str) -> None:
        self._password = password

    def get(self, key: str) -> str | None:
        if key.lower() == PASSWORD_KEY:
            return self._password
        return self._fields.get(key)

    def set(self, key: str, value: str) -> None:
        key = _check_key(key)
        value = _check_value(key, value)
        if key.lower() == PASSWORD_KEY:
            self._password = value
            return
        self._fields[key] = value

    def keys(self) -> list[str]:
        return sorted(self._fields)

    def render(self) -> str:
        lines = [self._password]
        lines.extend(f"{k}: {v}" for k, v in self._fields.items())
        if self.body:
            lines.append(self.body)
        return "\n".join(lines) + "\n"


class StructuredSecret:
    """Password line plus a YAML mapping document."""

    kind = "structured"

    def __init__(self, password: str = "", data: CommentedMap | None = None) -> None:
        self._password = password
        self._data: CommentedMap = data if data is not None else CommentedMap()

    @classmethod
    def parse(cls, content: str) -> StructuredSecret:
        """Parse rendered template content, raising SecretParseError on bad input."""
        password, _, rest = content.partition("\n")
        if not password.strip():
            msg = "structured secret has no password line"
            raise SecretParseError(msg)
        document = rest
        if document.lstrip().startswith(YAML_SEPARATOR):
            document = document.lstrip()[len(YAML_SEPARATOR) :]
        try:
            data = _new_yaml().load(document) if document.strip() else None
        except YAMLError as exc:
            msg = f"invalid YAML document: {exc}"
            raise SecretParseError(msg) from exc
        if data is None:
            data = CommentedMap()
        if not isinstance(data, dict):
            msg = f"structured secret must be a mapping, got {type(data).__name__}"
            raise SecretParseError(msg)
        return cls(password, data)

    @property
    def password(self) -> str:
        return self._password

    def set_password(self, password: str) -> None:
        self._password = password

    def get(self, key: str) -> str | None:
        if key.lower() == PASSWORD_KEY:
            return self._password
        value = self._data.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        key = _check_key(key)
        value = _check_value(key, value)
        if key.lower() == PASSWORD_KEY:
            self._password = value
            return
        if isinstance(self._data.get(key), (dict, list)):
            msg = f"field {key!r} holds a nested value and cannot be overwritten"
            raise SecretFieldError(msg, key=key)
        self._data[key] = value

    def keys(self) -> list[str]:
        return sorted(str(k) for k in self._data)

    def render(self) -> str:
        buf = StringIO()
        if self._data:
            _new_yaml().dump(self._data, buf)
        return f"{self._password}\n{YAML_SEPARATOR}\n{buf.getvalue()}"

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)


def parse_secret(content: str) -> Secret:
    """Parse stored content into the matching record shape.

    Content whose second line is the YAML document separator is structured;
    anything else is flat.
    """
    lines = content.splitlines()
    if len(lines) > 1 and lines[1].strip() == YAML_SEPARATOR:
        return StructuredSecret.parse(content)
    return FlatSecret.parse(content)
