# app/modules/auth/services.py

from dataclasses import dataclass
from app.modules.auth import models, schemas
from passlib.context import CryptContext
import jwt as pyjwt
import datetime
from app.core.config import settings
from app.core.gateway import DataGateway, get_gateway
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,  # Set explicit rounds
    bcrypt__ident="2b"   # Use the modern 2b identifier
)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller, resolved once per request and passed to services explicitly"""
    user_id: str
    email: str


class AuthEvents:
    """
    Session-change notifications. Listeners receive ``(event, context)`` and
    are removed by calling the function returned from ``subscribe``.
    """

    def __init__(self):
        self._listeners: List[Callable[[str, AuthContext], None]] = []

    def subscribe(self, callback: Callable[[str, AuthContext], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def publish(self, event: str, context: AuthContext) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, context)
            except Exception as e:
                logger.error(f"Auth listener failed on {event} for {context.email}: {str(e)}")


auth_events = AuthEvents()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies if the entered password matches the stored hashed password.
    """
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """
    Generates a secure hash for the password.
    """
    return pwd_context.hash(password)

def create_user(gateway: DataGateway, user: schemas.UserCreate) -> models.User:
    """
    Creates a new user in the database.
    """
    db_user = models.User(
        email=user.email,
        password_hash=get_password_hash(user.password),
        full_name=user.full_name
    )
    return gateway.add_user(db_user)

def authenticate_user(gateway: DataGateway, email: str, password: str) -> Optional[models.User]:
    """
    Authenticates a user in the database.
    """
    user = gateway.get_user_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user

def create_access_token(data: dict, expires_delta: int = None) -> str:
    """
    Creates a JWT token with the provided data.

    Args:
        data: Dictionary containing base token data (usually contains "sub" with user email)
        expires_delta: Token expiration time in minutes

    Returns:
        JWT token string
    """
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=expires_delta)
    to_encode.update({"exp": expire})

    return pyjwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def verify_token(token: str) -> Optional[dict]:
    """
    Verifies a JWT token and returns the payload.
    """
    try:
        return pyjwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except pyjwt.PyJWTError:
        return None

def _context_from_token(token: str, gateway: DataGateway) -> Optional[AuthContext]:
    payload = verify_token(token)
    if payload is None or payload.get("sub") is None:
        return None
    user = gateway.get_user_by_email(payload["sub"])
    if user is None:
        return None
    return AuthContext(user_id=str(user.id), email=user.email)

async def get_auth_context(token: str = Depends(oauth2_scheme),
                           gateway: DataGateway = Depends(get_gateway)) -> AuthContext:
    """
    Gets the authenticated caller from the JWT token.
    """
    context = _context_from_token(token, gateway)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context

async def get_optional_auth_context(token: Optional[str] = Depends(optional_oauth2_scheme),
                                    gateway: DataGateway = Depends(get_gateway)) -> Optional[AuthContext]:
    """
    Same as get_auth_context for endpoints that anonymous visitors may also call.
    """
    if not token:
        return None
    return _context_from_token(token, gateway)
