"""Authorization dependencies.

Tokens are issued by the external auth provider and signed with the shared
secret; this module only verifies them and checks roles.
"""

from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from docportal.config import settings
from docportal.database import get_db
from docportal.models.profile import Profile, SubadminPermission, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token", auto_error=False)


def get_token_from_request(
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(None),
) -> Optional[str]:
    """Get token from Authorization header or cookie."""
    if token:
        return token
    if access_token:
        return access_token
    return None


def get_current_user(
    token: Optional[str] = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> Profile:
    """Get current authenticated user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = db.query(Profile).filter(Profile.id == user_id).first()
    if user is None:
        raise credentials_exception
    return user


def can_view_stats(db: Session, user: Profile) -> bool:
    """Admins always may view statistics; subadmins need an active grant."""
    if user.role == UserRole.ADMIN.value:
        return True
    if user.role != UserRole.SUBADMIN.value:
        return False
    permission = (
        db.query(SubadminPermission)
        .filter(SubadminPermission.user_id == user.id, SubadminPermission.is_active == True)
        .first()
    )
    return bool(permission and permission.can_view_stats)


def require_stats_access(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Profile:
    """Require permission to view statistics."""
    if not can_view_stats(db, current_user):
        raise HTTPException(status_code=403, detail="Permission required to view statistics")
    return current_user


def require_dashboard_access(current_user: Profile = Depends(get_current_user)) -> Profile:
    """Require an admin or subadmin role."""
    if current_user.role not in (UserRole.ADMIN.value, UserRole.SUBADMIN.value):
        raise HTTPException(status_code=403, detail="Forbidden")
    return current_user
