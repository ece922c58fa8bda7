"""Write allowlist for settings payloads."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.page_settings import MUTABLE_FIELDS, PageSettingsUpdate
from weddingpage.utils.exceptions import ValidationError


def sanitize_settings(payload: Any) -> dict[str, Any]:
    """Reduce a client payload to the mutable settings fields.

    Keys outside the allowlist are dropped silently so newer clients can
    send extra fields. An empty wedding_date becomes None.

    Args:
        payload: Decoded JSON object from the client.

    Returns:
        Dict holding only allowlisted keys that were present in the payload.

    Raises:
        ValidationError: If the payload is not an object or a known field
            has a value of the wrong type.
    """
    if not isinstance(payload, dict):
        raise ValidationError("settings must be an object")

    try:
        update = PageSettingsUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    sanitized = update.model_dump(exclude_unset=True)
    # Guard against the model and the allowlist drifting apart
    return {k: v for k, v in sanitized.items() if k in MUTABLE_FIELDS}
