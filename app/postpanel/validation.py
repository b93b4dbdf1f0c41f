"""
Declarative field validation for form payloads.

A ``Schema`` maps field names to ``FieldRule`` objects. ``validate()`` walks the
schema, normalizes each value (trim strings, drop blank list entries, coerce
ids) and reports at most one ``FieldError`` per field: the first rule that
fails, checked in the order required -> type -> max length -> reference.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from app.postpanel.constants import MAX_DB_INT


STRING = "string"
ID_LIST = "id_list"


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    kind: str = STRING
    max_length: int | None = None
    # Mapped class whose integer `id` column every value must exist in.
    exists_in: type | None = None
    label: str | None = None


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


Schema = dict[str, FieldRule]


@dataclass
class ValidationResult:
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def errors_by_field(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for e in self.errors:
            out.setdefault(e.field, []).append(e.message)
        return out


def _label(name: str, rule: FieldRule) -> str:
    return rule.label or name.replace("_", " ")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple)) and not value:
        return True
    return False


def _clean_id_list(values: list[Any]) -> tuple[list[int], bool]:
    """Drop blanks, coerce to int, de-duplicate. Second item is False if any entry is not an id."""
    ids: list[int] = []
    valid = True
    for v in values:
        if v is None or (isinstance(v, str) and not v.strip()):
            continue
        if isinstance(v, bool):
            valid = False
            continue
        try:
            i = int(v.strip() if isinstance(v, str) else v)
        except (TypeError, ValueError):
            valid = False
            continue
        if i < 1 or i > MAX_DB_INT:
            valid = False
            continue
        if i not in ids:
            ids.append(i)
    return ids, valid


def _existing_ids(s: Session, model: type, ids: list[int]) -> set[int]:
    if not ids:
        return set()
    rows = s.query(model.id).filter(model.id.in_(ids)).all()
    return {r[0] for r in rows}


def _check_field(s: Session, name: str, rule: FieldRule, raw: Any) -> tuple[Any, str | None]:
    label = _label(name, rule)

    if rule.kind == ID_LIST:
        if raw is None:
            values: list[Any] = []
        elif isinstance(raw, (list, tuple)):
            values = list(raw)
        else:
            return None, f"The {label} field must be an array."
        ids, all_ints = _clean_id_list(values)
        if not ids and all_ints:
            if rule.required:
                return ids, f"The {label} field is required."
            return ids, None
        if not all_ints:
            return ids, f"The selected {label} is invalid."
        if rule.exists_in is not None:
            found = _existing_ids(s, rule.exists_in, ids)
            if any(i not in found for i in ids):
                return ids, f"The selected {label} is invalid."
        return ids, None

    if _is_missing(raw):
        if rule.required:
            return None, f"The {label} field is required."
        return None, None
    if not isinstance(raw, str):
        return raw, f"The {label} field must be a string."
    value = raw.strip()
    if rule.max_length is not None and len(value) > rule.max_length:
        return value, f"The {label} field must not be greater than {rule.max_length} characters."
    return value, None


def validate(s: Session, schema: Schema, payload: dict[str, Any]) -> ValidationResult:
    """Validate `payload` against `schema`. Keys not in the schema are ignored."""
    result = ValidationResult()
    for name, rule in schema.items():
        value, error = _check_field(s, name, rule, payload.get(name))
        result.data[name] = value
        if error:
            result.errors.append(FieldError(field=name, message=error))
    return result
