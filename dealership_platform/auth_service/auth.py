from datetime import datetime, timedelta
from typing import Optional, Union
import logging

import jwt
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..common.results import ErrorKind, Failure, Ok, Result, internal_failure
from ..common.schemas import Identity
from ..common.security import hash_password, verify_password
from .config import settings
from .models import Credential
from .schemas import UserLogin

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Email and password are required"
INVALID_CREDENTIALS = "Invalid credentials"
MISSING_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid token"

# Compared against when the email is unknown so both failure paths cost one hash check
_DUMMY_HASH = hash_password("dummy-password-for-timing")


class TokenService:
    """
    Issues and verifies signed access tokens.

    Holds no state besides the signing configuration, so one instance can be
    shared by concurrent requests.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, identity: Identity) -> str:
        now = datetime.utcnow()
        payload = {
            "sub": str(identity.id),
            "id": identity.id,
            "role": identity.role,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Union[Identity, Failure]:
        """
        Decode ``token`` and return the identity it carries.

        Bad signatures, malformed tokens, expired tokens and tokens whose
        claims do not describe an identity all yield the same failure.
        """
        if not token:
            return Failure(ErrorKind.AUTH, MISSING_TOKEN)
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]}
            )
            identity = Identity(id=claims["id"], role=claims["role"])
        except (jwt.PyJWTError, KeyError, ValidationError) as exc:
            logger.info("Token rejected: %s", exc.__class__.__name__)
            return Failure(ErrorKind.AUTH, INVALID_TOKEN)
        if str(identity.id) != claims["sub"]:
            return Failure(ErrorKind.AUTH, INVALID_TOKEN)
        return identity


def get_token_service() -> TokenService:
    return TokenService(settings.JWT_SECRET, settings.JWT_ALGORITHM, settings.JWT_EXPIRE_MINUTES)


def _password_matches(password: str, password_hash: str) -> bool:
    try:
        return verify_password(password, password_hash)
    except ValueError:
        # Unrecognised hash format in the store
        logger.warning("Stored password hash could not be parsed")
        return False


def authenticate(db: Session, credentials: Optional[UserLogin], tokens: TokenService) -> Result:
    """
    Check an email/password pair and issue a token for it.

    Unknown emails and wrong passwords produce the same failure so the
    response does not reveal which accounts exist.
    """
    if credentials is None or not credentials.email or not credentials.password:
        return Failure(ErrorKind.VALIDATION, MISSING_FIELDS)

    try:
        user = db.query(Credential).filter(Credential.email == credentials.email).first()
    except SQLAlchemyError as e:
        logger.error(f"Credential lookup failed: {e}", exc_info=True)
        return internal_failure()

    matches = _password_matches(credentials.password, user.password if user else _DUMMY_HASH)
    if user is None or not matches:
        logger.info("[Login] Failed login attempt, timestamp=%s", datetime.utcnow().isoformat())
        return Failure(ErrorKind.AUTH, INVALID_CREDENTIALS)

    token = tokens.issue(Identity(id=user.id, role=user.role))
    logger.info("[Login] Successful login: user_id=%s, timestamp=%s", user.id, datetime.utcnow().isoformat())
    return Ok({
        "token": token,
        "user": {"id": user.id, "name": user.name, "email": user.email, "role": user.role},
    })
