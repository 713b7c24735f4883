from __future__ import annotations

from typing import Any

from ..core.constants import INVALID_BODY_MESSAGE
from ..core.exceptions import ValidationError


def require_mac_list(body: Any) -> list:
    """Return body['mac_addresses'] or raise ValidationError.

    Only the outer shape is checked here; individual items are filtered by
    the normalizer.
    """
    if not isinstance(body, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)
    macs = body.get("mac_addresses")
    if macs is None or not isinstance(macs, list):
        raise ValidationError(INVALID_BODY_MESSAGE)
    return macs
