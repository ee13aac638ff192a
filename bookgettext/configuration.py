"""Pydantic-backed configuration loader for the gettext preprocessor."""

from __future__ import annotations

import os
import pathlib
from typing import Any, Dict, Mapping, Sequence

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .documents import PreprocessorContext
from .errors import CatalogConfigurationError

PREPROCESSOR_NAME = "gettext"
PO_FILE_KEY = "po-file"
ENV_PREFIX = "BOOKGETTEXT_"


class GettextConfig(BaseModel):
    """Schema of the ``preprocessor.gettext`` table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    po_file: str = Field(
        alias=PO_FILE_KEY,
        description="Path to the PO file holding the translations.",
    )

    @field_validator("po_file", mode="before")
    @classmethod
    def _require_string(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError(
                f"Expected a string for preprocessor.{PREPROCESSOR_NAME}.{PO_FILE_KEY}, "
                f"found {value!r} ({type(value).__name__})"
            )
        return value

    @field_validator("po_file")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("The PO file path must not be empty")
        return value

    def resolve_po_file(self, root: pathlib.Path) -> pathlib.Path:
        """Resolve the PO file path against the book root."""

        path = pathlib.Path(self.po_file).expanduser()
        if path.is_absolute():
            return path
        return root / path


def _env_overrides(root: pathlib.Path) -> Dict[str, str]:
    """Collect ``BOOKGETTEXT_*`` overrides from ``.env`` then the process environment."""

    allowed = {
        ENV_PREFIX + name.upper(): info.alias or name
        for name, info in GettextConfig.model_fields.items()
    }
    overrides: Dict[str, str] = {}

    def merge_values(values: Mapping[str, Any]) -> None:
        for key, value in sorted(values.items()):
            if value is None or key not in allowed:
                continue
            overrides[allowed[key]] = value

    dotenv_path = root / ".env"
    if dotenv_path.exists():
        merge_values(dotenv_values(dotenv_path))
    merge_values(os.environ)
    return overrides


def _format_validation_errors(entries: Sequence[Mapping[str, Any]]) -> str:
    details: list[str] = []
    for entry in entries:
        location = ".".join(str(part) for part in entry.get("loc") or () if part != "")
        message = str(entry.get("msg") or "Invalid value")
        # pydantic prefixes messages raised from validators.
        message = message.removeprefix("Value error, ")
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{message}")
    return "Configuration validation errors detected:\n" + "\n".join(details)


def load_settings(context: PreprocessorContext) -> GettextConfig:
    """Return the validated preprocessor settings for this build."""

    table = context.preprocessor_config(PREPROCESSOR_NAME)
    overrides = _env_overrides(context.root)

    if table is None and not overrides:
        raise CatalogConfigurationError(
            f"Could not read preprocessor.{PREPROCESSOR_NAME} configuration"
        )

    data: Dict[str, Any] = dict(table or {})
    data.update(overrides)
    if PO_FILE_KEY not in data:
        raise CatalogConfigurationError(
            f"Missing preprocessor.{PREPROCESSOR_NAME}.{PO_FILE_KEY} config value"
        )

    try:
        return GettextConfig.model_validate(data)
    except ValidationError as exc:
        raise CatalogConfigurationError(_format_validation_errors(exc.errors())) from exc
