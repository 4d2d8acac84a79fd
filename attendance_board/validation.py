"""Shape validation for attendance payloads coming off the wire."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .models import Action, AttendanceRecord

# Backend action vocabulary mapped to the two recognised actions.
ACTION_ALIASES: Dict[str, Action] = {
    "start": Action.CHECK_IN,
    "check_in": Action.CHECK_IN,
    "end": Action.CHECK_OUT,
    "stop": Action.CHECK_OUT,
    "check_out": Action.CHECK_OUT,
}

# Accepted spellings per field, the API's capitalised names first.
FIELD_NAMES: Dict[str, Tuple[str, ...]] = {
    "user_id": ("UserID", "user_id"),
    "timestamp": ("Timestamp", "timestamp"),
    "workplace_id": ("WorkplaceID", "workplace_id"),
    "action": ("Action", "action"),
}


class RecordValidationError(ValueError):
    """Raised when an attendance payload entry cannot become a record."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


_MISSING = object()


def _field(payload: Mapping[str, Any], name: str, default: Any = _MISSING) -> Any:
    for key in FIELD_NAMES[name]:
        if key in payload:
            return payload[key]
    if default is not _MISSING:
        return default
    raise RecordValidationError(f"missing field {name!r}", payload)


def parse_action(value: Any) -> Action:
    if isinstance(value, Action):
        return value
    if not isinstance(value, str):
        raise RecordValidationError(f"action must be a string, got {type(value).__name__}")
    try:
        return ACTION_ALIASES[value.strip().lower()]
    except KeyError:
        raise RecordValidationError(f"unknown action {value!r}") from None


def record_from_payload(payload: Any) -> AttendanceRecord:
    """Validate one raw log entry and return it as an :class:`AttendanceRecord`."""

    if not isinstance(payload, Mapping):
        raise RecordValidationError("attendance log entry must be an object", payload)

    user_id = _field(payload, "user_id")
    if not isinstance(user_id, str) or not user_id:
        raise RecordValidationError("user_id must be a non-empty string", payload)

    # The timestamp stays opaque here; unparsable values are handled downstream.
    timestamp = _field(payload, "timestamp")
    if timestamp is None:
        timestamp = ""
    if not isinstance(timestamp, str):
        raise RecordValidationError("timestamp must be a string", payload)

    workplace_id = _field(payload, "workplace_id", "") or ""
    if not isinstance(workplace_id, str):
        raise RecordValidationError("workplace_id must be a string", payload)

    try:
        action = parse_action(_field(payload, "action"))
    except RecordValidationError as exc:
        raise RecordValidationError(str(exc), payload) from None

    return AttendanceRecord(
        user_id=user_id,
        timestamp=timestamp,
        workplace_id=workplace_id,
        action=action,
    )


def validate_payloads(
    payloads: Iterable[Any],
) -> Tuple[List[AttendanceRecord], List[RecordValidationError]]:
    """Split raw entries into valid records and the errors for the rest."""

    records: List[AttendanceRecord] = []
    errors: List[RecordValidationError] = []
    for payload in payloads:
        try:
            records.append(record_from_payload(payload))
        except RecordValidationError as exc:
            errors.append(exc)
    return records, errors


__all__ = [
    "ACTION_ALIASES",
    "RecordValidationError",
    "parse_action",
    "record_from_payload",
    "validate_payloads",
]
