# tests/unit/test_place_domain_service.py
import re
import unittest

from gem_finder.domain.exceptions import (
    InvalidDataFormat,
    InvalidLocationFormat,
    InvalidRange,
    PlaceNotOwned,
    RequiredFieldMissing,
)
from gem_finder.domain.services.place_domain_service import PlaceDomainService
from gem_finder.models.place_model import Place
from gem_finder.models.user_model import User


CANONICAL = re.compile(r"^-?\d+(\.\d+)?,-?\d+(\.\d+)?$")


class TestNormalizeLocation(unittest.TestCase):
    def test_strips_letters_and_spaces(self):
        result = PlaceDomainService.normalize_location("  12.9716, N 77.5946 ")
        self.assertEqual(result, "12.9716,77.5946")

    def test_whitespace_separated_pair(self):
        self.assertEqual(
            PlaceDomainService.normalize_location("12.5   -0.25"), "12.5,-0.25"
        )

    def test_degree_signs_and_labels(self):
        self.assertEqual(
            PlaceDomainService.normalize_location("lat: 48.8584°, lng: 2.2945°"),
            "48.8584,2.2945",
        )

    def test_integer_coordinates_keep_float_form(self):
        self.assertEqual(PlaceDomainService.normalize_location("10,20"), "10.0,20.0")

    def test_small_values_never_use_exponent(self):
        result = PlaceDomainService.normalize_location("0.00001,-0.0000005")
        self.assertNotIn("e", result.lower())
        self.assertEqual(result, "0.00001,-0.0000005")

    def test_outputs_match_canonical_shape(self):
        samples = [
            "12.9716,77.5946",
            " -33.8688 , 151.2093 ",
            "40.7128\t-74.0060",
            "(51.5074, -0.1278)",
            "1,,,2",
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                self.assertRegex(PlaceDomainService.normalize_location(raw), CANONICAL)

    def test_rejects_unparseable_input(self):
        for raw in [None, "", "   ", "abc", "12.5", "1.2.3,4", "--5,6", "1-2,3", "1,2,3"]:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidLocationFormat) as cm:
                    PlaceDomainService.normalize_location(raw)
                self.assertEqual(
                    cm.exception.message, "Invalid location format. Use 'lat,lng'"
                )

    def test_rejects_locations_longer_than_the_column(self):
        # 1e119 prints positionally as 120 digits
        with self.assertRaises(InvalidLocationFormat):
            PlaceDomainService.normalize_location("1" * 120 + ",2")
        with self.assertRaises(InvalidLocationFormat):
            PlaceDomainService.normalize_location("2," + "9" * 70)
        # ordinary high-precision coordinates still fit
        result = PlaceDomainService.normalize_location("-33.868820123456, 151.209295987654")
        self.assertEqual(result, "-33.868820123456,151.209295987654")
        self.assertLessEqual(len(result), 64)


class TestPlaceRules(unittest.TestCase):
    def setUp(self):
        self.owner = User(id=1, name="Owner", is_admin=False)
        self.stranger = User(id=2, name="Stranger", is_admin=False)
        self.admin = User(id=3, name="Admin", is_admin=True)
        self.place = Place(id=10, user_id=1, title="Falls", location="1.0,2.0")

    def test_rating_bounds(self):
        for value in (1, 3, 5):
            self.assertEqual(PlaceDomainService.validate_rating(value), value)
        for value in (0, 6, -1):
            with self.subTest(value=value):
                with self.assertRaises(InvalidRange):
                    PlaceDomainService.validate_rating(value)

    def test_require_text_strips(self):
        self.assertEqual(PlaceDomainService.require_text("title", "  Falls "), "Falls")
        with self.assertRaises(RequiredFieldMissing):
            PlaceDomainService.require_text("title", "   ")
        with self.assertRaises(RequiredFieldMissing):
            PlaceDomainService.require_text("title", None)

    def test_title_fits_the_column(self):
        self.assertEqual(PlaceDomainService.require_title("a" * 200), "a" * 200)
        with self.assertRaises(InvalidDataFormat) as cm:
            PlaceDomainService.require_title("a" * 201)
        self.assertEqual(
            cm.exception.message, "Invalid format for title, expected: at most 200 characters"
        )
        with self.assertRaises(RequiredFieldMissing):
            PlaceDomainService.require_title("  ")

    def test_only_owner_can_edit(self):
        PlaceDomainService.ensure_can_edit(self.owner, self.place)
        with self.assertRaises(PlaceNotOwned):
            PlaceDomainService.ensure_can_edit(self.stranger, self.place)
        # admins do not get an edit bypass
        with self.assertRaises(PlaceNotOwned):
            PlaceDomainService.ensure_can_edit(self.admin, self.place)

    def test_owner_or_admin_can_delete(self):
        PlaceDomainService.ensure_can_delete(self.owner, self.place)
        PlaceDomainService.ensure_can_delete(self.admin, self.place)
        with self.assertRaises(PlaceNotOwned) as cm:
            PlaceDomainService.ensure_can_delete(self.stranger, self.place)
        self.assertEqual(cm.exception.message, "Not authorized to delete this place")
