# tests/unit/test_place_service.py
import datetime as dt
import unittest
from unittest.mock import MagicMock

from gem_finder.domain.exceptions import (
    InvalidLocationFormat,
    PlaceNotFound,
    PlaceNotOwned,
    RequiredFieldMissing,
)
from gem_finder.models.place_model import Place
from gem_finder.models.user_model import User
from gem_finder.schemas.place_schema import PlaceUpdate
from gem_finder.services.place_service import PlaceService
from gem_finder.utils.media_storage import LocalMediaStore


class TestPlaceService(unittest.TestCase):
    def setUp(self):
        self.uow = MagicMock()
        self.media = MagicMock(spec=LocalMediaStore)
        self.service = PlaceService(self.uow, media=self.media)

        self.owner = User(id=1, name="Owner", is_admin=False)
        self.stranger = User(id=2, name="Stranger", is_admin=False)
        self.admin = User(id=3, name="Admin", is_admin=True)
        self.place = Place(
            id=10,
            user_id=1,
            title="Falls",
            location="1.0,2.0",
            image_path="uploads/1700000000000-42.jpg",
        )

    def test_create_requires_title_before_touching_storage(self):
        with self.assertRaises(RequiredFieldMissing):
            self.service.create_place("  ", None, None, "1,2", None, self.owner)
        self.media.save_image.assert_not_called()
        self.uow.places.add.assert_not_called()

    def test_create_rejects_bad_location(self):
        with self.assertRaises(InvalidLocationFormat):
            self.service.create_place("Falls", None, None, "north", None, self.owner)
        self.uow.commit.assert_not_called()

    def test_create_removes_image_when_commit_fails(self):
        image = MagicMock(filename="falls.jpg")
        self.media.save_image.return_value = "uploads/123-1.jpg"
        self.uow.commit.side_effect = RuntimeError("db down")

        with self.assertRaises(RuntimeError):
            self.service.create_place("Falls", None, None, "1,2", image, self.owner)

        self.media.delete.assert_called_once_with("uploads/123-1.jpg")

    def test_create_stores_normalized_location(self):
        def assign_identity():
            stored = self.uow.places.add.call_args[0][0]
            stored.id = 5
            stored.created_at = dt.datetime(2024, 1, 1)

        self.uow.places.flush.side_effect = assign_identity
        self.media.public_url.return_value = None

        result = self.service.create_place(
            "Falls", "desc", "nature", " 1.5 , 2 ", None, self.owner
        )

        stored = self.uow.places.add.call_args[0][0]
        self.assertEqual(stored.location, "1.5,2.0")
        self.assertEqual(stored.user_id, 1)
        self.assertIsNone(stored.image_path)
        self.assertEqual(result.id, 5)
        self.assertEqual(result.location, "1.5,2.0")
        self.uow.commit.assert_called_once()

    def test_update_by_non_owner_is_forbidden(self):
        self.uow.places.get.return_value = self.place
        with self.assertRaises(PlaceNotOwned):
            self.service.update_place(10, PlaceUpdate(title="Mine now"), self.stranger)
        self.assertEqual(self.place.title, "Falls")
        self.uow.commit.assert_not_called()

    def test_update_applies_only_sent_fields(self):
        self.uow.places.get.return_value = self.place
        self.service.update_place(
            10, PlaceUpdate(location="3 , 4", category="lake"), self.owner
        )
        self.assertEqual(self.place.title, "Falls")
        self.assertEqual(self.place.location, "3.0,4.0")
        self.assertEqual(self.place.category, "lake")
        self.uow.commit.assert_called_once()

    def test_update_missing_place(self):
        self.uow.places.get.return_value = None
        with self.assertRaises(PlaceNotFound):
            self.service.update_place(99, PlaceUpdate(title="x"), self.owner)

    def test_delete_by_stranger_keeps_everything(self):
        self.uow.places.get.return_value = self.place
        with self.assertRaises(PlaceNotOwned):
            self.service.delete_place(10, self.stranger)
        self.uow.ratings.delete_for_place.assert_not_called()
        self.uow.places.delete.assert_not_called()
        self.media.delete.assert_not_called()

    def test_admin_delete_removes_dependents_and_image(self):
        self.uow.places.get.return_value = self.place

        self.service.delete_place(10, self.admin)

        self.uow.ratings.delete_for_place.assert_called_once_with(10)
        self.uow.comments.delete_for_place.assert_called_once_with(10)
        self.uow.favorites.delete_for_place.assert_called_once_with(10)
        self.uow.reports.delete_for_place.assert_called_once_with(10)
        self.uow.places.delete.assert_called_once_with(self.place)
        self.uow.commit.assert_called_once()
        self.media.delete.assert_called_once_with("uploads/1700000000000-42.jpg")

    def test_list_ranked_rounds_average(self):
        self.media.public_url.return_value = "http://testserver/uploads/1700000000000-42.jpg"
        self.place.created_at = dt.datetime(2024, 1, 1)
        self.uow.places.list_with_average.return_value = [(self.place, 4.456)]

        result = self.service.list_ranked()

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].avg_rating, 4.5)
        self.assertEqual(
            result[0].image_url, "http://testserver/uploads/1700000000000-42.jpg"
        )
        self.uow.places.list_with_average.assert_called_once_with()

    def test_top_rated_is_limited(self):
        self.uow.places.list_with_average.return_value = []
        self.service.top_rated()
        self.uow.places.list_with_average.assert_called_once_with(limit=10)
