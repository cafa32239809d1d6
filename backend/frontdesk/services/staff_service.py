"""
Staff service - identity operations
Sign-up, sign-in, sign-out and the profile/password settings
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from frontdesk.errors import AuthorizationError, BusinessRuleError, NotFoundError, ValidationError
from frontdesk.models.ontology import AuthAccount, Staff, StaffRole, StaffSession
from frontdesk.models.schemas import SignUpRequest, PasswordChange
from frontdesk.security.auth import (
    SessionContext, get_password_hash, verify_password, create_access_token, session_expiry
)

logger = logging.getLogger(__name__)

STAFF_NOT_FOUND = "Staff record not found. Please contact administrator."


class StaffService:
    """Staff identity service"""

    def __init__(self, db: Session):
        self.db = db

    def get_staff(self, staff_id: int) -> Optional[Staff]:
        return self.db.query(Staff).filter(Staff.id == staff_id).first()

    def get_staff_by_email(self, email: str) -> Optional[Staff]:
        return self.db.query(Staff).filter(Staff.email == email.lower()).first()

    def list_staff(self, role: Optional[StaffRole] = None) -> List[Staff]:
        query = self.db.query(Staff)
        if role:
            query = query.filter(Staff.role == role)
        return query.order_by(Staff.created_at.desc()).all()

    def sign_up(self, data: SignUpRequest) -> Staff:
        """
        Register a staff member

        Creates the auth principal, then the linked staff record, in one
        transaction. A principal left without a staff record by an earlier
        failed sign-up is re-used rather than blocking the email forever.
        """
        email = data.email.lower()
        if self.get_staff_by_email(email):
            raise BusinessRuleError("A user with this email already exists")

        account = self.db.query(AuthAccount).filter(AuthAccount.email == email).first()
        if account:
            logger.info(f"Re-linking orphaned auth account {account.id} for {email}")
            account.password_hash = get_password_hash(data.password)
        else:
            account = AuthAccount(email=email, password_hash=get_password_hash(data.password))
            self.db.add(account)
            self.db.flush()

        staff = Staff(
            id=account.id,
            email=email,
            full_name=data.full_name,
            role=data.role,
        )
        self.db.add(staff)
        self.db.commit()
        self.db.refresh(staff)
        logger.info(f"Staff registered: {email} ({staff.role.value})")
        return staff

    def sign_in(self, email: str, password: str) -> dict:
        """
        Sign in with email and password

        The session is opened as soon as the credentials check out; if no
        active staff record backs the account, it is revoked on the spot
        and the sign-in fails.
        """
        email = email.lower()
        account = self.db.query(AuthAccount).filter(AuthAccount.email == email).first()
        if not account or not verify_password(password, account.password_hash):
            logger.info(f"Failed sign-in for {email}")
            raise AuthorizationError("Invalid login credentials")

        session = StaffSession(
            id=str(uuid.uuid4()),
            account_id=account.id,
            expires_at=session_expiry(),
        )
        self.db.add(session)
        self.db.flush()

        staff = account.staff
        if not staff or not staff.is_active:
            session.revoked_at = datetime.now()
            self.db.commit()
            logger.warning(f"Forced sign-out of {email}: no active staff record")
            raise AuthorizationError(STAFF_NOT_FOUND)

        self.db.commit()
        token = create_access_token(staff.id, session.id, session.expires_at)
        return {
            'access_token': token,
            'token_type': 'bearer',
            'expires_at': session.expires_at,
            'staff': staff,
        }

    def sign_out(self, context: SessionContext) -> None:
        session = self.db.query(StaffSession).filter(StaffSession.id == context.session_id).first()
        if session and session.revoked_at is None:
            session.revoked_at = datetime.now()
            self.db.commit()

    def open_sessions(self, account_id: int) -> List[StaffSession]:
        sessions = self.db.query(StaffSession).filter(
            StaffSession.account_id == account_id,
            StaffSession.revoked_at.is_(None)
        ).all()
        return [s for s in sessions if s.is_open]

    def update_profile(self, staff_id: int, full_name: str) -> Staff:
        staff = self.get_staff(staff_id)
        if not staff:
            raise NotFoundError(STAFF_NOT_FOUND)
        staff.full_name = full_name
        self.db.commit()
        self.db.refresh(staff)
        return staff

    def change_password(self, staff_id: int, data: PasswordChange) -> None:
        if data.new_password != data.confirm_password:
            raise ValidationError("New passwords do not match")

        account = self.db.query(AuthAccount).filter(AuthAccount.id == staff_id).first()
        if not account:
            raise NotFoundError(STAFF_NOT_FOUND)
        if not verify_password(data.current_password, account.password_hash):
            raise AuthorizationError("Current password is incorrect")

        account.password_hash = get_password_hash(data.new_password)
        self.db.commit()
