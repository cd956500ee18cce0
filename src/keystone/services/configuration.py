"""Base configuration class for services.

Service settings (view manager options, security settings, ...) inherit from
this class to get consistent validation, immutability and a dictionary-based
factory method.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class BaseServiceConfiguration(BaseModel):
    """Base class for all service configurations.

    Features:
        - Pydantic validation for type safety
        - Immutable by default (frozen) for configuration integrity
        - from_properties() factory method for dictionary-based creation
        - Strict validation (no extra fields allowed)

    Example:
        ```python
        class ViewManagerOptions(BaseServiceConfiguration):
            cache: Path | None = None
            view_folder: str = "views"

        options = ViewManagerOptions.from_properties({"cache": "/srv/app/cache"})
        ```

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
        validate_assignment=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties dictionary with validation.

        Args:
            properties: Dictionary containing configuration properties

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If properties are invalid or missing required fields

        """
        return cls.model_validate(properties)
