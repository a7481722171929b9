"""Dependencias de autenticación (JWT Bearer) y autorización por capacidad."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from app.database import get_db
from app.models.user import User
from app.config import settings
from app.utils.errors import PermissionDeniedError
from app.utils.permissions import has_capability

bearer_scheme = HTTPBearer()

ALGORITHM = "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _unauthorized("Token inválido o expirado")


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    subject = decode_token(credentials.credentials).get("sub")
    if subject is None or not str(subject).isdigit():
        raise _unauthorized("Token sin identificador de usuario")

    # Un usuario desactivado pierde el acceso aunque su token siga vigente.
    user = db.query(User).filter(User.user_id == int(subject), User.is_active == True).first()
    if not user:
        raise _unauthorized("Usuario inexistente o inactivo")
    return user


def require_capability(capability: str):
    """Dependencia que exige que el rol del usuario actual tenga ``capability``."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_capability(current_user, capability):
            raise PermissionDeniedError(f"El rol '{current_user.role}' no permite: {capability}")
        return current_user

    return checker
