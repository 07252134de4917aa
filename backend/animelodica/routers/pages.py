"""Public pages."""

from fastapi import APIRouter, Depends

from animelodica.dependencies.auth import fetch_current_user
from animelodica.models.user import User
from animelodica.schemas.auth import UserInfo

router = APIRouter(tags=["pages"])


@router.get("/")
def home(current_user: User | None = Depends(fetch_current_user)) -> dict:
    """Home page, with the current user when logged in."""
    return {
        "message": "Animelodica",
        "current_user": UserInfo.model_validate(current_user) if current_user else None,
    }
