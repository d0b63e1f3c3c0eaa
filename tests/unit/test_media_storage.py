# tests/unit/test_media_storage.py
import io
import re
import tempfile
import unittest
from pathlib import Path

from fastapi import UploadFile
from starlette.datastructures import Headers

from gem_finder.domain.exceptions import InvalidDataFormat
from gem_finder.utils.media_storage import LocalMediaStore


def make_upload(name: str, content: bytes, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestLocalMediaStore(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = LocalMediaStore(upload_dir=self.tmp.name, url_prefix="/uploads")

    def tearDown(self):
        self.tmp.cleanup()

    def test_public_url_shapes_resolve_to_one_form(self):
        expected = "http://testserver/uploads/123-4.jpg"
        for key in (
            "uploads/123-4.jpg",
            "/uploads/123-4.jpg",
            "123-4.jpg",
            "uploads\\123-4.jpg",
            "C:\\app\\uploads\\123-4.jpg",
        ):
            with self.subTest(key=key):
                self.assertEqual(self.store.public_url(key), expected)

    def test_public_url_passes_absolute_and_empty(self):
        self.assertEqual(
            self.store.public_url("https://cdn.example.com/a.png"),
            "https://cdn.example.com/a.png",
        )
        self.assertIsNone(self.store.public_url(None))
        self.assertIsNone(self.store.public_url(""))

    def test_save_image_writes_uniquely_named_file(self):
        key = self.store.save_image(make_upload("Photo.PNG", b"\x89PNG-data", "image/png"))

        self.assertRegex(key, re.compile(r"^uploads/\d+-\d+\.png$"))
        stored = Path(self.tmp.name) / key.split("/")[-1]
        self.assertEqual(stored.read_bytes(), b"\x89PNG-data")

    def test_save_image_rejects_non_images(self):
        with self.assertRaises(InvalidDataFormat):
            self.store.save_image(make_upload("notes.txt", b"hello", "text/plain"))
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])

    def test_delete_removes_stored_file(self):
        key = self.store.save_image(make_upload("a.jpg", b"jpeg", "image/jpeg"))
        self.store.delete(key)
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])
        # absent keys and absolute URLs are ignored
        self.store.delete(None)
        self.store.delete("https://cdn.example.com/a.png")

    def test_save_image_rejects_non_image_suffixes(self):
        for name in ("evil.html", "page.svg", "script.js", "noext"):
            with self.subTest(name=name):
                with self.assertRaises(InvalidDataFormat):
                    self.store.save_image(
                        make_upload(name, b"<script>alert(1)</script>", "image/png")
                    )
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])

    def test_allowed_suffixes_are_kept(self):
        for name in ("a.jpg", "b.jpeg", "c.gif", "d.webp", "e.PNG"):
            with self.subTest(name=name):
                key = self.store.save_image(make_upload(name, b"img", "image/png"))
                self.assertTrue(key.endswith(Path(name).suffix.lower()))
