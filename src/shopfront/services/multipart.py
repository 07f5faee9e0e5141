"""Multipart form encoding for product and account uploads.

Field naming is a contract with the storefront API:

- every product image goes under the one shared name ``productImages``
- each element of ``tags``, ``size`` and ``colours`` is its own part named
  ``tags[]``, ``size[]`` and ``colours[]``
- a mapping-valued ``category`` is sent as a compact JSON string
- ``None`` values are skipped; booleans are ``true``/``false``

Parts are produced in input order as the ``files`` list accepted by
``requests``, so text fields go out as form fields without a filename.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Mapping, Union

import orjson

from shopfront.services.filters import format_scalar
from shopfront.shared.constants import MultipartFields
from shopfront.shared.errors import ErrorCode, create_validation_error

# A path on disk, raw (filename, content) or (filename, content, content_type)
FileSource = Union[str, Path, tuple[str, Union[bytes, IO[bytes]]], tuple[str, Union[bytes, IO[bytes]], str]]

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class MultipartForm:
    """Ordered multipart parts.

    ``parts`` is passed straight to ``requests`` as ``files``.
    """

    parts: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def add_field(self, name: str, value: Any) -> None:
        self.parts.append((name, (None, format_scalar(value))))

    def add_file(self, name: str, source: FileSource) -> None:
        self.parts.append((name, _file_part(source)))

    def field_names(self) -> list[str]:
        return [name for name, _ in self.parts]

    def values(self, name: str) -> list[Any]:
        """Whole ``(filename, content[, content_type])`` part of every field called ``name``."""
        return [part for part_name, part in self.parts if part_name == name]

    def __bool__(self) -> bool:
        return bool(self.parts)


def _file_part(source: FileSource) -> tuple[Any, ...]:
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise create_validation_error(
                message=f"Cannot read upload file: {path}",
                field="file",
                operation="encode_multipart",
                original_error=e,
            ) from e
        content_type = mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE
        return (path.name, content, content_type)

    if isinstance(source, tuple) and len(source) == 2:
        filename, content = source
        content_type = mimetypes.guess_type(filename)[0] or DEFAULT_CONTENT_TYPE
        return (filename, content, content_type)

    if isinstance(source, tuple) and len(source) == 3:
        return tuple(source)

    raise create_validation_error(
        message=f"Unsupported upload source: {type(source).__name__}",
        field="file",
        operation="encode_multipart",
        code=ErrorCode.VALIDATION_ERROR,
    )


def _image_sources(value: Any) -> list[FileSource]:
    # A bare path or one (filename, content[, type]) tuple is a single image
    if isinstance(value, tuple) and len(value) in (2, 3) and (
        isinstance(value[1], (bytes, bytearray)) or hasattr(value[1], "read")
    ):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def encode_product_form(product_data: Mapping[str, Any]) -> MultipartForm:
    """Encode product create/update data as multipart parts.

    Example:
        >>> form = encode_product_form({"name": "Tee", "tags": ["a", "b"]})
        >>> form.field_names()
        ['name', 'tags[]', 'tags[]']
    """
    form = MultipartForm()

    for key, value in product_data.items():
        if value is None:
            continue

        if key == MultipartFields.PRODUCT_IMAGES:
            for image in _image_sources(value):
                form.add_file(MultipartFields.PRODUCT_IMAGES, image)
        elif key in MultipartFields.ARRAY_FIELDS and isinstance(value, (list, tuple)):
            array_name = MultipartFields.ARRAY_FIELDS[key]
            for element in value:
                form.add_field(array_name, element)
        elif key == MultipartFields.CATEGORY and isinstance(value, Mapping):
            form.add_field(key, orjson.dumps(dict(value)).decode())
        elif isinstance(value, (list, tuple)):
            form.add_field(key, ",".join(format_scalar(v) for v in value))
        else:
            form.add_field(key, value)

    return form


def encode_register_form(user_data: Mapping[str, Any]) -> MultipartForm:
    """Encode account registration data; ``profileImage`` becomes a file part."""
    form = MultipartForm()

    for key, value in user_data.items():
        if key == MultipartFields.PROFILE_IMAGE or value is None:
            continue
        form.add_field(key, value)

    profile_image = user_data.get(MultipartFields.PROFILE_IMAGE)
    if profile_image:
        form.add_file(MultipartFields.PROFILE_IMAGE, profile_image)

    return form


__all__ = [
    "FileSource",
    "MultipartForm",
    "encode_product_form",
    "encode_register_form",
]
