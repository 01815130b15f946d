from fastapi import Header, status

from ..database import get_db  # noqa: F401  (re-exported for dependency overrides)
from ..models.booking_status import ActorRole
from ..utils.errors import error_response


def get_actor_role(x_actor_role: str = Header(default="")) -> ActorRole:
    """Role of the caller, set by the authenticating gateway in front of us."""
    try:
        return ActorRole(x_actor_role.strip().lower())
    except ValueError:
        raise error_response(
            "Unknown actor role",
            {"X-Actor-Role": f"expected one of {', '.join(r.value for r in ActorRole)}"},
            status.HTTP_401_UNAUTHORIZED,
        )
