"""Password hashing, bearer-token sessions and the identity dependencies."""

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session, select
from werkzeug.security import check_password_hash, generate_password_hash

from fittrack.config import Settings
from fittrack.database import get_session
from fittrack.models import AuthSession, Profile, as_utc, utcnow

logger = logging.getLogger(__name__)

SessionDep = Annotated[Session, Depends(get_session)]

bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Passwords and tokens
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, stored: str) -> bool:
    return check_password_hash(stored, password)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def open_session(session: Session, profile: Profile, settings: Settings) -> str:
    """Issue a new bearer token for ``profile``. Only its digest is stored."""
    token = secrets.token_urlsafe(32)
    auth = AuthSession(
        profile_id=profile.id,
        token_hash=hash_token(token),
        expires_at=utcnow() + timedelta(days=settings.session_ttl_days),
    )
    session.add(auth)
    session.commit()
    return token


def close_session(session: Session, token: str) -> None:
    auth = session.exec(
        select(AuthSession).where(AuthSession.token_hash == hash_token(token))
    ).first()
    if auth is not None:
        session.delete(auth)
        session.commit()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


BearerToken = Annotated[str, Depends(get_bearer_token)]


def get_current_profile(token: BearerToken, session: SessionDep) -> Profile:
    auth = session.exec(
        select(AuthSession).where(AuthSession.token_hash == hash_token(token))
    ).first()
    if auth is None or as_utc(auth.expires_at) <= utcnow():
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )
    profile = session.get(Profile, auth.profile_id)
    if profile is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


def get_admin_profile(profile: CurrentProfile) -> Profile:
    if not profile.is_admin:
        logger.warning("Profile %s denied administrator access", profile.id)
        raise HTTPException(status_code=403, detail="Administrator access required")
    return profile


AdminProfile = Annotated[Profile, Depends(get_admin_profile)]
