import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from gem_finder.schemas.place_schema import PlaceResponse


class CommentSchema:
    class Create(BaseModel):
        content: str

    class Out(Create):
        id: int
        place_id: int
        user_id: int
        created_at: dt.datetime
        user_name: Optional[str] = None

        model_config = ConfigDict(from_attributes=True)


class CommentPosted(BaseModel):
    message: str
    comment: CommentSchema.Out


class CommentThread(BaseModel):
    comments: List[CommentSchema.Out]


class FavouriteSchema:
    class Listing(BaseModel):
        favorites: List[PlaceResponse]


class ReportSchema:
    class Create(BaseModel):
        reason: Optional[str] = None
