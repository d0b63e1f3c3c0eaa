import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileUser(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ProfileStats(BaseModel):
    places_posted: int = Field(..., alias="placesPosted")
    coins_earned: int = Field(..., alias="coinsEarned")

    model_config = ConfigDict(populate_by_name=True)


class ProfilePlace(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: dt.datetime


class ProfileResponse(BaseModel):
    user: ProfileUser
    stats: ProfileStats
    places: List[ProfilePlace]
