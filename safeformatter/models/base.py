"""Base model for all SafeFormatter Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all SafeFormatter models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class SafeFormatterBaseModel(BaseModel):
    """Base model class for all SafeFormatter Pydantic models."""

    model_config = ConfigDict(
        # Strip whitespace from string fields
        str_strip_whitespace=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Validate assignment after model creation
        validate_assignment=True,
    )

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones).

        Returns:
            Dictionary representation including all fields
        """
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")
