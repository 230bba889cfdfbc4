"""Catalog domain errors."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog errors."""


class NotFoundError(CatalogError):
    """A catalog record does not exist."""

    resource_type = "Resource"

    def __init__(self, identifier: int):
        self.identifier = identifier
        super().__init__(f"{self.resource_type} with id {identifier} not found")


class CourseNotFoundError(NotFoundError):
    resource_type = "Course"


class LessonNotFoundError(NotFoundError):
    resource_type = "Lesson"
