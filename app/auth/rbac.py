from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.schemas import CurrentUser
from app.core.enums import UserRole


def require_role(*roles: UserRole):
    """
    Dependency factory restricting a route to the given roles.

    Example:
        APIRouter(dependencies=[Depends(require_role(UserRole.ADMIN))])
    """

    async def _checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {current_user.role.value} is not authorized to access this route",
            )
        return current_user

    return _checker


require_admin = require_role(UserRole.ADMIN)
require_student = require_role(UserRole.STUDENT)
