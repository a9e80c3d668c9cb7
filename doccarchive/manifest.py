"""Decoding of per-symbol render manifests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import IdentifierURL


class SymbolIdentifier(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str
    interface_language: Optional[str] = Field(default=None, alias="interfaceLanguage")

    @field_validator("url")
    @classmethod
    def _require_absolute_url(cls, value: str) -> str:
        IdentifierURL.parse(value)
        return value


class SymbolManifest(BaseModel):
    """The subset of a render manifest needed to identify its symbol."""

    model_config = ConfigDict(extra="ignore")

    identifier: SymbolIdentifier

    @property
    def identifier_url(self) -> IdentifierURL:
        return IdentifierURL.parse(self.identifier.url)


@dataclass(frozen=True)
class ManifestDecodeResult:
    """Either a decoded manifest or the reason decoding failed."""

    manifest: Optional[SymbolManifest] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.manifest is not None


def decode_manifest(data: bytes) -> ManifestDecodeResult:
    """Decode raw manifest bytes without raising.

    Archives contain plenty of JSON that does not describe a symbol (indexes,
    theme settings), so failures are returned rather than raised.
    """
    try:
        manifest = SymbolManifest.model_validate_json(data)
    except ValidationError as exc:
        return ManifestDecodeResult(error=f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")
    return ManifestDecodeResult(manifest=manifest)


__all__ = ["ManifestDecodeResult", "SymbolIdentifier", "SymbolManifest", "decode_manifest"]
