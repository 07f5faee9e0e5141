"""Tests for multipart form encoding of product and account uploads."""

import orjson
import pytest

from shopfront.services.multipart import (
    MultipartForm,
    encode_product_form,
    encode_register_form,
)
from shopfront.shared.errors import DomainError


class TestEncodeProductForm:
    def test_images_share_one_field_name(self):
        form = encode_product_form(
            {
                "name": "Tee",
                "productImages": [("a.png", b"A"), ("b.jpg", b"B")],
            },
        )

        assert form.field_names() == ["name", "productImages", "productImages"]
        first, second = form.values("productImages")
        assert first == ("a.png", b"A", "image/png")
        assert second[0] == "b.jpg"
        assert second[1] == b"B"

    def test_array_fields_use_bracket_names(self):
        form = encode_product_form(
            {
                "tags": ["summer", "sale"],
                "size": ["sm", "md", "lg"],
                "colours": ["red"],
            },
        )

        assert form.field_names() == [
            "tags[]",
            "tags[]",
            "size[]",
            "size[]",
            "size[]",
            "colours[]",
        ]
        assert form.values("tags[]") == [(None, "summer"), (None, "sale")]

    def test_mapping_category_is_compact_json(self):
        form = encode_product_form({"category": {"_id": "c1", "name": "Shoes"}})

        (value,) = form.values("category")
        assert value[0] is None
        assert orjson.loads(value[1]) == {"_id": "c1", "name": "Shoes"}
        assert " " not in value[1]

    def test_plain_category_is_sent_as_is(self):
        form = encode_product_form({"category": "c1"})
        assert form.values("category") == [(None, "c1")]

    def test_scalars_and_none(self):
        form = encode_product_form(
            {
                "name": "Tee",
                "price": 19.0,
                "totalStock": 4,
                "isTrending": True,
                "description": None,
            },
        )

        assert form.field_names() == ["name", "price", "totalStock", "isTrending"]
        assert form.values("price") == [(None, "19")]
        assert form.values("totalStock") == [(None, "4")]
        assert form.values("isTrending") == [(None, "true")]

    def test_other_lists_are_comma_joined(self):
        form = encode_product_form({"materials": ["cotton", "linen"]})
        assert form.values("materials") == [(None, "cotton,linen")]

    def test_image_from_path(self, tmp_path):
        image = tmp_path / "front.png"
        image.write_bytes(b"\x89PNG")

        form = encode_product_form({"productImages": [image]})

        assert form.values("productImages") == [("front.png", b"\x89PNG", "image/png")]

    def test_single_image_path_is_a_file_part(self, tmp_path):
        image = tmp_path / "front.jpg"
        image.write_bytes(b"JPEG")

        form = encode_product_form({"productImages": str(image)})

        assert form.values("productImages") == [("front.jpg", b"JPEG", "image/jpeg")]

    def test_single_image_tuple_is_one_part(self):
        form = encode_product_form({"productImages": ("a.png", b"A")})

        assert form.values("productImages") == [("a.png", b"A", "image/png")]

    def test_missing_image_path(self, tmp_path):
        with pytest.raises(DomainError, match="Cannot read upload file"):
            encode_product_form({"productImages": [tmp_path / "missing.png"]})

    def test_unsupported_source(self):
        with pytest.raises(DomainError, match="Unsupported upload source"):
            encode_product_form({"productImages": [12345]})


class TestEncodeRegisterForm:
    def test_profile_image_is_a_file_part(self):
        form = encode_register_form(
            {
                "name": "Ada",
                "email": "ada@example.com",
                "password": "secret",
                "profileImage": ("me.jpg", b"JPEG"),
            },
        )

        assert form.field_names() == ["name", "email", "password", "profileImage"]
        assert form.values("profileImage") == [("me.jpg", b"JPEG", "image/jpeg")]

    def test_without_profile_image(self):
        form = encode_register_form({"name": "Ada", "profileImage": None})
        assert form.field_names() == ["name"]


def test_empty_form_is_falsy():
    assert not MultipartForm()
    form = MultipartForm()
    form.add_field("x", 1)
    assert form
