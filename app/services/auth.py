"""Authentication service.

Registration, login and the emailed reset-code flow. Each operation checks
its preconditions in a fixed order (input shape, then account existence,
then reset-code state) and stops at the first failure before touching the
store.

Known limitation: forgot-password and reset-password read the user row and
then update it without a lock. Two concurrent forgot-password requests for
the same email both succeed; the later write wins and the code emailed by
the earlier one stops working.
"""

import hmac
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import store_errors
from app.exceptions import (
    CodeExpired,
    CodeMismatch,
    DuplicateEmail,
    InvalidCredentials,
    UserNotFound,
    ValidationError,
)
from app.models.user import User, utcnow
from app.services.jwt import JWTService, get_jwt_service
from app.services.mail import MailMessage, MailSender, get_mail_sender
from app.services.password import PasswordHasher, get_password_hasher
from app.services.reset_code import generate_reset_code

logger = logging.getLogger("prof_smart")

MIN_PASSWORD_LENGTH = 6
RESET_EMAIL_SUBJECT = "Password reset - Prof Smart"


@dataclass(frozen=True)
class PublicUser:
    """User fields that are safe to return to clients."""

    id: int
    name: str
    email: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: PublicUser


def _public(user: User) -> PublicUser:
    return PublicUser(id=user.id, name=user.name, email=user.email)


class AuthService:
    """Handles user registration, authentication and password resets."""

    def __init__(
        self,
        hasher: PasswordHasher,
        jwt_service: JWTService,
        mail_sender: MailSender,
        reset_code_ttl: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.hasher = hasher
        self.jwt_service = jwt_service
        self.mail_sender = mail_sender
        self.reset_code_ttl = reset_code_ttl
        self.clock = clock

    def register(self, db: Session, name: str | None, email: str | None, password: str | None) -> PublicUser:
        """Create a new account. Emails are matched case-sensitively."""
        if not name or not email or not password:
            raise ValidationError("Fill in all fields.")

        with store_errors(db):
            if db.query(User.id).filter(User.email == email).first():
                raise DuplicateEmail()

            user = User(name=name, email=email, password_hash=self.hasher.hash(password))
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                # Lost a race against a concurrent registration for the same email
                db.rollback()
                raise DuplicateEmail() from e
            db.refresh(user)

        logger.info("Registered user id=%s", user.id)
        return _public(user)

    def login(self, db: Session, email: str | None, password: str | None) -> LoginResult:
        """Verify credentials and issue a session token.

        Unknown email and wrong password produce the same error.
        """
        if not email or not password:
            raise ValidationError("Fill in all fields.")

        with store_errors(db):
            user = db.query(User).filter(User.email == email).first()

        if not user or not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentials()

        token = self.jwt_service.create_token(user_id=user.id, email=user.email)
        return LoginResult(token=token, user=_public(user))

    def forgot_password(self, db: Session, email: str | None) -> None:
        """Store a fresh reset code for the account and email it to the owner.

        The code is committed before the email is sent. If delivery fails the
        code stays valid and EmailDeliveryError propagates to the caller.
        """
        if not email:
            raise ValidationError("Email is required.")

        with store_errors(db):
            user = db.query(User).filter(User.email == email).first()
            if not user:
                raise UserNotFound("Email not found.")

            user_id, name = user.id, user.name
            code = generate_reset_code()
            user.reset_token = code
            user.reset_expires = self.clock() + self.reset_code_ttl
            db.commit()

        minutes = int(self.reset_code_ttl.total_seconds() // 60)
        self.mail_sender.send(
            MailMessage(
                to=email,
                subject=RESET_EMAIL_SUBJECT,
                text=f"Hello, {name}!\n\nYour code: {code}\n\nValid for {minutes} minutes.",
            )
        )
        logger.info("Reset code sent for user id=%s", user_id)

    def reset_password(
        self, db: Session, email: str | None, code: str | None, new_password: str | None
    ) -> None:
        """Replace the password if ``code`` matches the pending, unexpired reset code."""
        if not email or not code or not new_password:
            raise ValidationError("Incomplete data.")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password too short.")

        with store_errors(db):
            user = db.query(User).filter(User.email == email).first()
            if not user:
                raise UserNotFound()
            user_id = user.id

            if user.reset_token is None or not hmac.compare_digest(user.reset_token.encode(), code.encode()):
                raise CodeMismatch()
            if user.reset_expires is None or self.clock() > user.reset_expires:
                raise CodeExpired()

            user.password_hash = self.hasher.hash(new_password)
            user.reset_token = None
            user.reset_expires = None
            db.commit()

        logger.info("Password reset for user id=%s", user_id)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        settings = get_settings()
        _auth_service = AuthService(
            hasher=get_password_hasher(),
            jwt_service=get_jwt_service(),
            mail_sender=get_mail_sender(),
            reset_code_ttl=timedelta(minutes=settings.RESET_CODE_EXPIRE_MINUTES),
        )
    return _auth_service
