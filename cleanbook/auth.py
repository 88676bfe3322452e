import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .domain.enums import ActorRole
from .security_utils import create_jwt_token, verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer()


class Actor(BaseModel):
    """Authenticated caller: a client, a collaborator or an administrator"""

    id: str
    role: ActorRole
    name: Optional[str] = None


def create_access_token(actor_id: str, role: ActorRole, name: Optional[str] = None) -> str:
    """Issue a bearer token for the surrounding login flows"""
    claims = {"sub": actor_id, "role": ActorRole(role).value}
    if name:
        claims["name"] = name
    return create_jwt_token(claims)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Actor:
    """Resolve the bearer token into an Actor"""
    payload = verify_jwt_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    actor_id = payload.get("sub")
    role = payload.get("role")
    if not actor_id or role not in ActorRole.__members__:
        logger.warning("⚠️ Token missing subject or role")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return Actor(id=actor_id, role=ActorRole(role), name=payload.get("name"))


def require_role(*roles: ActorRole):
    """Dependency factory restricting an endpoint to the given roles"""

    async def checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            logger.warning(f"⚠️ {actor.role.value} {actor.id} denied (requires {[r.value for r in roles]})")
            raise HTTPException(status_code=403, detail="Not allowed for this role")
        return actor

    return checker
