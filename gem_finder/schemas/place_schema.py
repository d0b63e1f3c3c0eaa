import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlaceUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = None


class PlaceResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    location: str
    image_url: Optional[str] = None
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class RatedPlaceResponse(PlaceResponse):
    avg_rating: float = 0.0


class PlaceDetailResponse(RatedPlaceResponse):
    rating_count: int = 0
    owner_name: Optional[str] = None


class PlaceMutationResponse(BaseModel):
    message: str
    place: PlaceResponse


class PlaceListResponse(BaseModel):
    places: List[PlaceResponse]


class TopRatedResponse(BaseModel):
    top_places: List[RatedPlaceResponse] = Field(..., alias="topPlaces")

    model_config = ConfigDict(populate_by_name=True)


class MyPostsResponse(BaseModel):
    my_places: List[PlaceResponse] = Field(..., alias="myPlaces")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str
