"""Stage options and environment settings.

``StageOptions`` holds the two recognised options of the stage::

    StageOptions()                                        # base=cwd, optimize per env
    StageOptions(base="/app", optimize=False)
    StageOptions(optimize=OptimizeSettings(minify=False))

When ``optimize`` is omitted it defaults to ``True`` only when
``CSSFORGE_ENV=production``; see :class:`ForgeSettings`.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cssforge.errors import ConfigError


class ForgeSettings(BaseSettings):
    """Environment-driven settings.

    Attributes:
        env: Deployment environment; ``production`` turns optimization on
            by default.
        log_level: Level used by the CLI to configure logging.
    """

    model_config = SettingsConfigDict(
        env_prefix="CSSFORGE_",
        case_sensitive=False,
        extra="ignore",
    )

    env: str = "development"
    log_level: str = "warning"

    @property
    def is_production(self) -> bool:
        return self.env.strip().lower() == "production"


class OptimizeSettings(BaseModel):
    """Object form of the ``optimize`` option.

    Attributes:
        minify: Minify the optimized output.
    """

    model_config = ConfigDict(extra="forbid")

    minify: bool = False


def _default_optimize() -> bool:
    return ForgeSettings().is_production


class StageOptions(BaseModel):
    """Options recognised by :class:`~cssforge.stage.UtilityStage`.

    Attributes:
        base: Root directory for automatic content detection.  Defaults to
            the current working directory; always stored absolute.
        optimize: ``True``/``False``, or :class:`OptimizeSettings` to enable
            optimization with explicit minification.
    """

    model_config = ConfigDict(extra="forbid", validate_default=True)

    base: str = Field(default_factory=os.getcwd)
    optimize: bool | OptimizeSettings = Field(default_factory=_default_optimize)

    @field_validator("base")
    @classmethod
    def expand_and_resolve_base(cls, v: str) -> str:
        return str(Path(v).expanduser().resolve())

    @property
    def optimize_enabled(self) -> bool:
        return self.optimize is not False

    @property
    def minify(self) -> bool:
        """``optimize=True`` minifies; the object form minifies only on request."""
        if isinstance(self.optimize, OptimizeSettings):
            return self.optimize.minify
        return self.optimize

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> StageOptions:
        """Validate a plain mapping, raising :class:`ConfigError` on bad input."""
        try:
            return cls.model_validate(data or {})
        except PydanticValidationError as exc:
            errors = exc.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
            raise ConfigError(f"Invalid stage options: {exc}", field=field) from exc
