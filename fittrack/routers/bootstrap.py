from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session, SQLModel

from fittrack.database import get_session
from fittrack.seed import seed_default_exercises

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


class InitDatabaseRead(SQLModel):
    seeded: int
    message: str


@router.post("/init-database", response_model=InitDatabaseRead)
def init_database(session: SessionDep):
    inserted = seed_default_exercises(session)
    if inserted == 0:
        return InitDatabaseRead(seeded=0, message="Database already initialized")
    return InitDatabaseRead(seeded=inserted, message=f"Inserted {inserted} default exercises")
