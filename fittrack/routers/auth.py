import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import field_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Field, Session, SQLModel, select

from fittrack.auth import (
    BearerToken,
    CurrentProfile,
    close_session,
    hash_password,
    open_session,
    verify_password,
)
from fittrack.config import Settings, get_settings
from fittrack.database import get_session
from fittrack.models import Profile

logger = logging.getLogger(__name__)

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


class ProfileRead(SQLModel):
    id: int
    email: str
    display_name: str
    is_admin: bool


class SignupBody(SQLModel):
    email: str
    password: str = Field(min_length=6)
    display_name: str = ""

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return value


class LoginBody(SQLModel):
    email: str
    password: str


class TokenRead(SQLModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileRead


def _token_read(token: str, profile: Profile) -> TokenRead:
    return TokenRead(
        access_token=token,
        profile=ProfileRead(
            id=profile.id,
            email=profile.email,
            display_name=profile.display_name,
            is_admin=profile.is_admin,
        ),
    )


@router.post("/signup", response_model=TokenRead, status_code=201)
def signup(body: SignupBody, session: SessionDep, settings: SettingsDep):
    email = body.email.lower()
    profile = Profile(
        email=email,
        display_name=body.display_name or email.split("@")[0],
        password_hash=hash_password(body.password),
        is_admin=email in settings.admin_emails,
    )
    session.add(profile)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    session.refresh(profile)
    logger.info("Created profile %s (admin=%s)", profile.id, profile.is_admin)
    return _token_read(open_session(session, profile, settings), profile)


@router.post("/login", response_model=TokenRead)
def login(body: LoginBody, session: SessionDep, settings: SettingsDep):
    profile = session.exec(select(Profile).where(Profile.email == body.email.lower())).first()
    if profile is None or not verify_password(body.password, profile.password_hash):
        logger.warning("Rejected login for %s", body.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _token_read(open_session(session, profile, settings), profile)


@router.post("/logout", status_code=204)
def logout(token: BearerToken, profile: CurrentProfile, session: SessionDep):
    close_session(session, token)


@router.get("/me", response_model=ProfileRead)
def me(profile: CurrentProfile):
    return profile
