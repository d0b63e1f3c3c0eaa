# Import order is important to avoid circular dependencies
from gem_finder.models.user_model import User
from gem_finder.models.place_model import Place

# Rows that hang off a place
from gem_finder.models.rating_model import Rating
from gem_finder.models.comment_model import Comment
from gem_finder.models.favourite_model import Favorite
from gem_finder.models.report_model import Report

__all__ = [
    "User",
    "Place",
    "Rating",
    "Comment",
    "Favorite",
    "Report",
]
