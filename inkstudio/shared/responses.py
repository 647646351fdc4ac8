"""Response envelope shared by every JSON endpoint: {success, data, error, code}"""

from typing import Any, Optional


def ok(data: Any) -> dict:
    return {"success": True, "data": data, "error": None}


def fail(message: str, code: Optional[str] = None) -> dict:
    return {"success": False, "data": None, "error": message, "code": code}
