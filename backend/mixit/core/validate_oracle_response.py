"""Oracle Response Validation — pure checks on untrusted oracle output.

Invariants:
    - Never raises: every input maps to OracleSuccess or OracleValidationFailure
    - Rejects missing fields, empty names, names over max_name_length, icons over max_icon_length
    - Text fallback accepts exactly "<icon> <name>" (icon has no letters or digits)
"""

from pydantic import ValidationError

from mixit.core.oracle_outcome import OracleSuccess, OracleValidationFailure
from mixit.schemas.oracle import OraclePayload

DEFAULT_MAX_NAME_LENGTH = 40
DEFAULT_MAX_ICON_LENGTH = 16


def validate_oracle_payload(
    data: object,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
    max_icon_length: int = DEFAULT_MAX_ICON_LENGTH,
) -> OracleSuccess | OracleValidationFailure:
    """Validate a structured {name, icon} payload."""
    if not isinstance(data, dict):
        return OracleValidationFailure(
            f"expected an object, got {type(data).__name__}", raw=repr(data),
        )
    try:
        payload = OraclePayload.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        return OracleValidationFailure(
            f"invalid or missing fields: {', '.join(fields)}", raw=repr(data),
        )
    if len(payload.name) > max_name_length:
        return OracleValidationFailure(
            f"name exceeds {max_name_length} characters", raw=payload.name,
        )
    if len(payload.icon) > max_icon_length:
        return OracleValidationFailure(
            f"icon exceeds {max_icon_length} characters", raw=payload.icon,
        )
    return OracleSuccess(name=payload.name, icon=payload.icon)


def parse_text_answer(
    text: str | None,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
    max_icon_length: int = DEFAULT_MAX_ICON_LENGTH,
) -> OracleSuccess | OracleValidationFailure:
    """Parse a plain "<icon> <name>" answer, e.g. "💨 Steam"."""
    if not text or not text.strip():
        return OracleValidationFailure("empty answer", raw=text)
    icon, _, name = text.strip().partition(" ")
    if not name.strip():
        return OracleValidationFailure("answer is not '<icon> <name>'", raw=text)
    if any(ch.isalnum() for ch in icon):
        return OracleValidationFailure("answer does not start with an icon", raw=text)
    return validate_oracle_payload(
        {"name": name, "icon": icon},
        max_name_length=max_name_length,
        max_icon_length=max_icon_length,
    )
