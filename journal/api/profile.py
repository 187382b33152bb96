"""Profile and settings API.

The profile is a display name for personalization, not authentication.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field, field_validator

from journal.api.deps import get_profile_service
from journal.models.trade import JournalModel
from journal.services.profile import ProfileService

router = APIRouter(prefix="/api", tags=["profile"])


class ProfileRequest(JournalModel):
    username: str = Field(min_length=3, max_length=64)

    @field_validator("username")
    @classmethod
    def _trim_username(cls, value: str) -> str:
        text = value.strip()
        if len(text) < 3:
            raise ValueError("must be at least 3 characters")
        return text


class SettingsUpdate(JournalModel):
    starting_balance: float | None = Field(default=None, gt=0)
    page_size: int | None = Field(default=None, ge=1, le=500)
    max_risk_percent: float | None = Field(default=None, gt=0, le=100)


@router.get("/profile")
def get_profile(profile: ProfileService = Depends(get_profile_service)):
    user = profile.get_user()
    if user is None:
        raise HTTPException(status_code=404, detail="No profile set")
    return user.model_dump(mode="json", by_alias=True)


@router.put("/profile")
def set_profile(body: ProfileRequest, profile: ProfileService = Depends(get_profile_service)):
    return profile.set_user(body.username).model_dump(mode="json", by_alias=True)


@router.delete("/profile", status_code=204)
def clear_profile(profile: ProfileService = Depends(get_profile_service)):
    profile.clear_user()


@router.get("/settings")
def get_settings(profile: ProfileService = Depends(get_profile_service)):
    return profile.get_settings().model_dump(by_alias=True)


@router.put("/settings")
def update_settings(body: SettingsUpdate, profile: ProfileService = Depends(get_profile_service)):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    return profile.update_settings(changes).model_dump(by_alias=True)
