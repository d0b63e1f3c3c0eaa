import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt


class RatingCreate(BaseModel):
    # Range is a domain rule, checked by the service
    rating: StrictInt


class RatingResponse(BaseModel):
    id: int
    place_id: int
    user_id: int
    rating: int
    created_at: dt.datetime
    updated_at: dt.datetime
    user_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RatingSubmitResponse(BaseModel):
    message: str
    rating: RatingResponse


class PlaceRatingStats(BaseModel):
    place_id: int
    average_rating: float
    total_ratings: int
    rating_distribution: dict[str, int]  # {"1": 0, "2": 1, ..., "5": 4}


class PlaceRatingsResponse(BaseModel):
    ratings: List[RatingResponse]
    stats: PlaceRatingStats
