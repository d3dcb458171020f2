"""Acting user resolution.

Authentication happens at the gateway, which forwards the authenticated
user's ID in the ``X-User-Id`` header.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status


async def optional_user_id(
    x_user_id: Annotated[int | None, Header()] = None,
) -> int | None:
    """Viewer ID when present, used for like flags on reads."""
    return x_user_id


async def required_user_id(
    x_user_id: Annotated[int | None, Header()] = None,
) -> int:
    """Acting user for writes.

    Raises:
        HTTPException: 401 when the gateway did not forward a user
    """
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return x_user_id


ViewerId = Annotated[int | None, Depends(optional_user_id)]
ActorId = Annotated[int, Depends(required_user_id)]
