from __future__ import annotations

from typing import Any

from checkout_api.core.errors import ValidationError
from checkout_api.domain.schema import SESSION_ID_PREFIX


def validate_session_id(value: Any) -> str:
    session_id = "" if value is None else str(value)
    if not session_id.startswith(SESSION_ID_PREFIX):
        raise ValidationError("Invalid session_id")
    return session_id
