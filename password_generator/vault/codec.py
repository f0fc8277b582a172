"""
Vault Record Codec — Text encoding of the credential list.

The vault plaintext is a minimal JSON-like array of three-field objects::

    [{"service":"github","username":"alice","password":"p@ss"},{...}]

Grammar:
    array   := "[" [ object { "," object } ] "]"
    object  := "{" "\"service\":" string "," "\"username\":" string ","
               "\"password\":" string "}"
    string  := "\"" { char | "\\\\" | "\\\"" | "\\n" } "\""

Only backslash, double quote and newline are escaped. Every other
character, braces and commas included, is written as-is; the reader
tracks string state so those never act as delimiters inside a value.
"""
import logging
from typing import Optional
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from ..exceptions import MalformedRecordError

logger = logging.getLogger("password_generator.vault")

FIELDS = ("service", "username", "password")

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}
_UNESCAPES = {"\\": "\\", '"': '"', "n": "\n"}


class CredentialRecord(BaseModel):
    """One stored secret. Identity is its position in the loaded list."""

    model_config = ConfigDict(frozen=True)

    service: str
    username: str
    password: str

    def __repr__(self) -> str:
        return (
            f"CredentialRecord(service={self.service!r}, "
            f"username={self.username!r}, password='***')"
        )

    __str__ = __repr__


def escape(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def serialize(records: Iterable[CredentialRecord]) -> str:
    """Encode records in fixed field order.

    Args:
        records: Ordered credential records.

    Returns:
        Array text, ``"[]"`` for no records.
    """
    objects = []
    for record in records:
        fields = ",".join(
            f'"{name}":"{escape(getattr(record, name))}"' for name in FIELDS
        )
        objects.append("{" + fields + "}")
    return "[" + ",".join(objects) + "]"


def split_objects(body: str) -> list[str]:
    """Split an array body at ``},{`` boundaries found outside strings.

    Returns:
        Object texts, each still wrapped in braces.
    """
    parts: list[str] = []
    start = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(body):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "," and body[i - 1:i] == "}" and body[i + 1:i + 2] == "{":
            parts.append(body[start:i])
            start = i + 1
    parts.append(body[start:])
    return parts


def _read_string(text: str, pos: int) -> tuple[str, int]:
    """Read a quoted string starting at ``text[pos]``.

    Returns:
        Tuple of (unescaped value, index after the closing quote).

    Raises:
        MalformedRecordError: If no string starts at ``pos`` or it never ends.
    """
    if pos >= len(text) or text[pos] != '"':
        raise MalformedRecordError(f"expected string at offset {pos}")
    value = []
    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            if i + 1 >= len(text):
                break
            nxt = text[i + 1]
            value.append(_UNESCAPES.get(nxt, nxt))
            i += 2
            continue
        if ch == '"':
            return "".join(value), i + 1
        value.append(ch)
        i += 1
    raise MalformedRecordError("unterminated string")


def parse_object(text: str) -> CredentialRecord:
    """Parse one ``{...}`` object.

    Raises:
        MalformedRecordError: If the object is not well formed or lacks
            one of the three fields.
    """
    text = text.strip()
    if len(text) < 2 or text[0] != "{" or text[-1] != "}":
        raise MalformedRecordError("object is not wrapped in braces")
    inner = text[1:-1]
    fields: dict[str, str] = {}
    pos = 0
    while True:
        name, pos = _read_string(inner, pos)
        if inner[pos:pos + 1] != ":":
            raise MalformedRecordError(f"expected ':' after field {name!r}")
        value, pos = _read_string(inner, pos + 1)
        fields[name] = value
        if pos == len(inner):
            break
        if inner[pos] != ",":
            raise MalformedRecordError(f"unexpected character at offset {pos}")
        pos += 1
    missing = [name for name in FIELDS if name not in fields]
    if missing:
        raise MalformedRecordError(f"missing field(s): {', '.join(missing)}")
    return CredentialRecord(**{name: fields[name] for name in FIELDS})


def deserialize(text: Optional[str]) -> list[CredentialRecord]:
    """Decode array text back into records.

    Never raises: an input that is not an array yields an empty list, and
    an individual object that cannot be parsed is skipped.

    Args:
        text: Array text produced by :func:`serialize`.

    Returns:
        Ordered list of records.
    """
    if not text:
        return []
    trimmed = text.strip()
    if len(trimmed) < 2 or trimmed[0] != "[" or trimmed[-1] != "]":
        logger.warning("Vault plaintext is not an array; ignoring it")
        return []
    body = trimmed[1:-1].strip()
    if not body:
        return []
    records: list[CredentialRecord] = []
    for index, obj in enumerate(split_objects(body)):
        try:
            records.append(parse_object(obj))
        except MalformedRecordError as err:
            logger.warning("Skipping malformed vault entry #%d: %s", index, err)
    return records
