"""
Authentication and session gate

Every request other than sign-up/sign-in carries a bearer JWT. The token
names a StaffSession row; the session must be open and the staff record
behind it must exist and be active. The result is an explicit
SessionContext handed to the routes that need it.
"""
import bcrypt
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from frontdesk.config import settings
from frontdesk.database import get_db
from frontdesk.errors import PermissionDeniedError
from frontdesk.models.ontology import Staff, StaffRole, StaffSession

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def create_access_token(staff_id: int, session_id: str, expires_at: datetime) -> str:
    """Create a JWT bound to one session row"""
    to_encode = {
        "sub": str(staff_id),
        "sid": session_id,
        "exp": expires_at,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )


def session_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now()) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


@dataclass
class SessionContext:
    """
    The signed-in caller

    Attributes:
        staff_id: staff (and auth account) id
        email: staff email
        full_name: staff display name
        role: staff role
        session_id: StaffSession id the token is bound to
    """

    staff_id: int
    email: str
    full_name: str
    role: StaffRole
    session_id: str

    def has_role(self, *roles: StaffRole) -> bool:
        return self.role in roles

    @classmethod
    def from_staff(cls, staff: Staff, session_id: str) -> "SessionContext":
        return cls(
            staff_id=staff.id,
            email=staff.email,
            full_name=staff.full_name,
            role=staff.role,
            session_id=session_id,
        )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> SessionContext:
    """Resolve the bearer token to a SessionContext or reject with 401"""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    session_id = payload.get("sid")
    try:
        staff_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid authentication credentials")

    session = db.query(StaffSession).filter(StaffSession.id == session_id).first()
    if not session or session.account_id != staff_id or not session.is_open:
        raise _unauthorized("Session expired or signed out")

    staff = db.query(Staff).filter(Staff.id == staff_id).first()
    if not staff:
        raise _unauthorized("Staff record not found. Please contact administrator.")
    if not staff.is_active:
        raise _unauthorized("Staff account is disabled")

    return SessionContext.from_staff(staff, session.id)


def require_role(allowed_roles):
    """Dependency factory: caller must hold one of `allowed_roles`"""
    async def role_checker(current: SessionContext = Depends(get_current_session)):
        if not current.has_role(*allowed_roles):
            raise PermissionDeniedError("Insufficient permissions")
        return current
    return role_checker


require_manager = require_role([StaffRole.ADMIN, StaffRole.MANAGER])
