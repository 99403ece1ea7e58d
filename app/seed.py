"""Seed the bootstrap owner account from settings (OWNER_USERNAME / OWNER_PASSWORD)."""
import logging
from sqlalchemy.orm import Session
from app.config import get_settings
from app.models.user import User, UserRank
from app.services.auth import get_password_hash


def seed_owner(db: Session) -> User | None:
    settings = get_settings()
    if not settings.owner_password:
        return None
    user = db.query(User).filter(User.username == settings.owner_username).first()
    if user:
        return user
    user = User(
        username=settings.owner_username,
        hashed_password=get_password_hash(settings.owner_password),
        rank=UserRank.OWNER,
    )
    db.add(user)
    db.commit()
    logging.getLogger("uvicorn.error").info("Seeded owner account %s", user.username)
    return user
