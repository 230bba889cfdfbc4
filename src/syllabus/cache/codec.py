"""Snapshot codec for cached course collections.

Snapshots are stored as an orjson-encoded JSON array using the models'
camelCase aliases. Decoding goes through a Pydantic TypeAdapter, so unknown
fields are ignored and missing optional fields fall back to their defaults.
"""

from __future__ import annotations

from collections.abc import Sequence

import orjson
from pydantic import TypeAdapter, ValidationError

from syllabus.core.model import Course


class SnapshotEncodeError(ValueError):
    """Courses could not be serialized into a snapshot."""


class SnapshotDecodeError(ValueError):
    """Cached payload could not be turned back into courses."""


_course_list = TypeAdapter(list[Course])


def encode_courses(courses: Sequence[Course]) -> bytes:
    """Encode an ordered course sequence as JSON bytes.

    Raises:
        SnapshotEncodeError: If a course holds a value JSON cannot carry,
            such as a string with lone surrogates.
    """
    try:
        return orjson.dumps(
            [course.model_dump(mode="json", by_alias=True) for course in courses]
        )
    except (orjson.JSONEncodeError, TypeError, ValueError) as e:
        raise SnapshotEncodeError(f"Cannot encode courses snapshot: {e}") from e


def decode_courses(payload: bytes | str) -> list[Course]:
    """Decode JSON bytes produced by encode_courses.

    Raises:
        SnapshotDecodeError: If the payload is not valid JSON or does not
            describe a list of courses.
    """
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Invalid snapshot JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotDecodeError(f"Snapshot must be a JSON array, got {type(data).__name__}")

    try:
        return _course_list.validate_python(data)
    except ValidationError as e:
        raise SnapshotDecodeError(f"Snapshot does not match course schema: {e}") from e
