from __future__ import annotations

from typing import Any, Dict

_UNSET: Any = object()


# PUBLIC_INTERFACE
def success_envelope(data: Any = _UNSET) -> Dict[str, Any]:
    """
    Build a 'success' response envelope.

    Args:
        data: Payload placed under 'data'. When omitted the key is left out
            entirely, e.g. for delete acknowledgements.

    Returns:
        Dict with 'status' and, if given, 'data'.
    """
    envelope: Dict[str, Any] = {"status": "success"}
    if data is not _UNSET:
        envelope["data"] = data
    return envelope


def fail_envelope(data: Dict[str, Any]) -> Dict[str, Any]:
    """Envelope for client errors (invalid input, not found)."""
    return {"status": "fail", "data": data}


def error_envelope(kind: str, message: str) -> Dict[str, Any]:
    """Envelope for server side failures."""
    return {"status": "error", "data": {"kind": kind, "message": message}}
