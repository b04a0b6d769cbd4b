"""Configuration for validation runs with environment fallback.

Configuration supports both explicit instantiation and a layered
``from_properties`` factory:

1. Explicit properties (highest priority)
2. Environment variables (fallback)
3. Defaults (lowest priority)
"""

from __future__ import annotations

import os
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from doccheck.errors import ConfigurationError

DEFAULT_MAX_CONCURRENCY = 32
DEFAULT_ERROR_THRESHOLD = 10

# Environment variable -> configuration field
_ENV_FIELDS: dict[str, str] = {
    "max_concurrency": "DOCCHECK_MAX_CONCURRENCY",
    "error_threshold": "DOCCHECK_ERROR_THRESHOLD",
    "timeout": "DOCCHECK_TIMEOUT",
    "index_file": "DOCCHECK_INDEX_FILE",
}


class ValidationConfig(BaseModel):
    """Execution configuration for a validation run.

    Attributes:
        max_concurrency: Number of documents processed simultaneously.
        error_threshold: Above this many issues, CI output collapses to a
            single warning.
        timeout: Deadline for the whole run in seconds.
        exclude_prefixes: Content-relative prefixes of partial documents that
            are never validated directly.
        index_file: Entry document name.
        report_entry_document: Whether the entry document's own issues are
            enumerated by the reporter.
        ci: Emit CI annotations instead of console text.
        extensions: Ordered ``module:attribute`` specs of extensions to load.
        discover_entry_points: Also load extensions published under the
            ``doccheck.extensions`` entry-point group.

    Example:
        ```python
        config = ValidationConfig(max_concurrency=8)

        # From properties dict with env fallback
        config = ValidationConfig.from_properties({"error_threshold": 5})
        ```

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1)
    error_threshold: int = Field(default=DEFAULT_ERROR_THRESHOLD, ge=0)
    timeout: float = Field(default=300.0, gt=0)
    exclude_prefixes: tuple[str, ...] = ("include/",)
    index_file: str = "index.adoc"
    report_entry_document: bool = False
    ci: bool = False
    extensions: tuple[str, ...] = ()
    discover_entry_points: bool = True

    @field_validator("exclude_prefixes")
    @classmethod
    def validate_exclude_prefixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Normalise prefixes to forward slashes without a leading './'."""
        normalised: list[str] = []
        for prefix in v:
            if not prefix.strip():
                raise ValueError("Exclude prefixes cannot be empty")
            normalised.append(prefix.replace("\\", "/").removeprefix("./"))
        return tuple(normalised)

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - DOCCHECK_MAX_CONCURRENCY: Worker count (default: 32)
        - DOCCHECK_ERROR_THRESHOLD: CI error threshold (default: 10)
        - DOCCHECK_TIMEOUT: Run deadline in seconds (default: 300)
        - DOCCHECK_INDEX_FILE: Entry document (default: index.adoc)
        - DOCCHECK_EXTENSIONS: Comma-separated extension specs
        - GITHUB_ACTIONS: ``true`` enables CI annotation output

        Args:
            properties: Configuration properties dictionary

        Returns:
            Validated configuration instance

        Raises:
            ConfigurationError: If configuration is invalid

        """
        config_data = properties.copy()

        for field_name, env_name in _ENV_FIELDS.items():
            if field_name not in config_data and env_name in os.environ:
                config_data[field_name] = os.environ[env_name]

        if "extensions" not in config_data:
            raw = os.getenv("DOCCHECK_EXTENSIONS", "")
            config_data["extensions"] = tuple(
                spec.strip() for spec in raw.split(",") if spec.strip()
            )

        if "ci" not in config_data:
            config_data["ci"] = os.getenv("GITHUB_ACTIONS", "").lower() == "true"

        try:
            return cls.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid validation configuration: {e}") from e
