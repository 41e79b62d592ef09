import operator
from pathlib import Path
from typing import Annotated, Any, ClassVar, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.types import NonNegativeInt, PositiveInt

from ...common.exceptions import VirtualStackValidationException


class _ConvertedValidation(BaseModel):
    """Base model that re-raises pydantic errors as package exceptions."""

    def __init__(self, **data):
        """Initialize with custom validation error handling."""
        try:
            super().__init__(**data)
        except (ValidationError, ValueError) as e:
            if isinstance(e, ValidationError) and hasattr(e, "errors"):
                errors = e.errors()
            else:
                errors = [{"msg": str(e), "type": "value_error", "loc": ["unknown"]}]
            raise VirtualStackValidationException(
                self._format_validation_errors(errors)
            ) from e

    @staticmethod
    def _format_validation_errors(errors: list) -> str:
        """Format Pydantic validation errors into user-friendly messages."""
        formatted_errors = []

        for error in errors:
            loc = error.get("loc") or ["unknown"]
            field = loc[0] if len(loc) > 1 and isinstance(loc[-1], int) else loc[-1]
            message = error.get("msg", "Validation error")
            formatted_errors.append(f"{field}: {message}")

        return "; ".join(formatted_errors)


class StackInputValidation(_ConvertedValidation):
    """Input validation model for VirtualImageStack construction."""

    VALID_EXTENSIONS: ClassVar[set[str]] = {
        "png",
        "tif",
        "tiff",
        "bmp",
        "jpg",
        "jpeg",
        "pgm",
        "ppm",
        "webp",
    }

    directory: Annotated[
        Path,
        Field(
            description="Directory holding the stack members",
            examples=["data/stack", "/tmp/frames"],
        ),
    ]
    extension: Annotated[
        str,
        Field(
            min_length=1,
            description="File extension of every member, with or without a leading dot",
            examples=["png", ".tiff"],
        ),
    ]

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v: Path) -> Path:
        """Reject paths that exist but are not directories."""
        if v.exists() and not v.is_dir():
            raise ValueError(f"Path '{v}' exists and is not a directory.")
        return v

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Strip a leading dot and check the codec supports the extension."""
        extension = v[1:] if v.startswith(".") else v
        if extension.lower() not in cls.VALID_EXTENSIONS:
            raise ValueError(
                f"Unsupported image format '{extension}'. "
                f"Supported formats: {', '.join(sorted(cls.VALID_EXTENSIONS))}"
            )
        return extension


class CropRectValidation(_ConvertedValidation):
    """A crop rectangle given as (x, y, width, height)."""

    rect: tuple[NonNegativeInt, NonNegativeInt, PositiveInt, PositiveInt]


class MaskValidation(_ConvertedValidation):
    """1-based member positions selected for aggregation."""

    mask: Optional[list[PositiveInt]] = None

    @field_validator("mask", mode="before")
    @classmethod
    def validate_integral(cls, v: Any) -> Any:
        """Accept any integral type (including numpy integers) but not floats."""
        if v is None:
            return v
        try:
            return [operator.index(position) for position in v]
        except TypeError as e:
            raise ValueError(f"mask positions must be integers: {e}") from e

    def positions(self, length: int) -> frozenset[int]:
        """Selected positions, defaulting to every position ``1..length``."""
        if self.mask is None:
            return frozenset(range(1, length + 1))
        return frozenset(self.mask)
