from typing import Optional
from fastapi import Header, HTTPException

def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """The caller's identity, taken from the X-User-Id header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="User authentication required")
    return x_user_id.strip()
