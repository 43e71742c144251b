from typing import Any, Optional

def is_owned_by(resource: Optional[Any], user_id: Optional[str]) -> bool:
    """
    True when the resource exists and belongs to user_id.
    Unowned and missing resources are treated the same way by callers.
    """
    if resource is None or not user_id:
        return False
    return getattr(resource, "user_id", None) == user_id
