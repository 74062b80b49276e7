from typing import Optional

from fastapi import HTTPException, Request
from slowapi import Limiter

from spotmap.core.types import UserId


def get_authorization_header(request: Request) -> str:
    """Used for rate limiting."""
    authorization = request.headers.get("authorization")
    if authorization is None or not authorization.startswith("Bearer "):
        return "default"
    return authorization[7:]


async def get_caller_user_id(request: Request) -> UserId:
    """Get the id of the authenticated caller. Set on the request state by the authentication middleware."""
    user_id: Optional[UserId] = getattr(request.state, "user_id", None)
    if user_id is None:
        raise HTTPException(401, detail="Unauthorized")
    return user_id


limiter = Limiter(key_func=get_authorization_header)
