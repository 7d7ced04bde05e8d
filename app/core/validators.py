"""
Custom validators for Django models and forms.

This module provides domain-agnostic validators for:
- File uploads (size, extension)
- Security (script injection in user-submitted text)

Usage:
    from core.validators import validate_file_size, validate_no_script

    class Post(models.Model):
        image = models.ImageField(validators=[validate_file_size(max_mb=5)])

    class Comment(models.Model):
        body = models.TextField(validators=[validate_no_script])

Note:
    Validator factories return plain functions, which Django's migration
    writer cannot serialize. Wrap them in deconstructible classes (see
    FileSizeValidator) when they are used on model fields.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError
from django.utils.deconstruct import deconstructible
from django.utils.translation import gettext_lazy as _

if TYPE_CHECKING:
    from django.core.files import File


SCRIPT_PATTERNS = (
    r"<\s*script",
    r"javascript:",
    r"\bon\w+\s*=",  # onclick, onload, etc.
    r"data:\s*text/html",
)


@deconstructible
class FileSizeValidator:
    """Reject files larger than max_mb megabytes."""

    def __init__(self, max_mb: int = 10):
        self.max_mb = max_mb

    def __call__(self, file: File) -> None:
        max_bytes = self.max_mb * 1024 * 1024
        if file.size > max_bytes:
            raise ValidationError(
                _("File size must be less than %(max)sMB. Current size: %(size).1fMB"),
                code="file_too_large",
                params={"max": self.max_mb, "size": file.size / 1024 / 1024},
            )

    def __eq__(self, other):
        return isinstance(other, FileSizeValidator) and self.max_mb == other.max_mb


@deconstructible
class FileExtensionValidator:
    """Reject files whose extension is not in allowed_extensions."""

    def __init__(self, allowed_extensions: list[str]):
        self.allowed_extensions = [ext.lower() for ext in allowed_extensions]

    def __call__(self, file: File) -> None:
        ext = os.path.splitext(file.name)[1].lower().lstrip(".")
        if ext not in self.allowed_extensions:
            raise ValidationError(
                _("File extension '%(ext)s' is not allowed. Allowed: %(allowed)s"),
                code="invalid_extension",
                params={"ext": ext, "allowed": ", ".join(self.allowed_extensions)},
            )

    def __eq__(self, other):
        return (
            isinstance(other, FileExtensionValidator)
            and self.allowed_extensions == other.allowed_extensions
        )


def validate_file_size(max_mb: int = 10) -> FileSizeValidator:
    """
    Validator factory for file size limits.

    Usage:
        image = models.ImageField(validators=[validate_file_size(max_mb=5)])
    """
    return FileSizeValidator(max_mb)


def validate_file_extension(allowed_extensions: list[str]) -> FileExtensionValidator:
    """
    Validator factory for file extension limits.

    Args:
        allowed_extensions: Extensions without the dot, e.g. ["jpg", "png"]
    """
    return FileExtensionValidator(allowed_extensions)


def validate_no_script(value: str) -> None:
    """
    Validate that string contains no script-like content.

    Checks for script tags, inline event handlers, javascript: URLs and
    HTML data URLs.

    Raises:
        ValidationError: If script content found
    """
    for pattern in SCRIPT_PATTERNS:
        if re.search(pattern, value, re.IGNORECASE):
            raise ValidationError(
                _("Script content is not allowed in this field."),
                code="script_content",
            )
