# File: site_keeper/manifest.py
"""site_keeper.manifest: the monitor manifest shared by the build and verify runs.

The file looks like::

    {
        "endpoints": [
            {
                "method": "GET",
                "url": "https://example.com/path",
                "expected-status-code": 200,
                "expected-body-hash": "<base64 of sha512>"
            }
        ]
    }

Both models are frozen: the builder hands over a finished manifest and the
verifier only ever reads it.
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Tuple, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from site_keeper.logger import logger

__all__ = ["Endpoint", "Manifest", "ManifestError", "read_manifest", "write_manifest"]


class ManifestError(ValueError):
    """The manifest file cannot be read, parsed or written."""


class Endpoint(BaseModel):
    """One URL to check and the response it is expected to produce."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    method: str = Field("GET", min_length=1)
    url: str
    expected_status_code: int = Field(200, ge=100, le=599, alias="expected-status-code")
    expected_body_hash: str = Field(..., alias="expected-body-hash")

    @field_validator("method")
    def _upper_method(cls, v: str) -> str:
        return v.upper()

    @field_validator("url")
    def _check_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"url must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("expected_body_hash")
    def _check_base64(cls, v: str) -> str:
        try:
            base64.b64decode(v, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"expected-body-hash is not base64: {exc}") from exc
        return v

    @property
    def context(self) -> Tuple[str, str]:
        return (self.method, self.url)

    def __str__(self) -> str:
        return f"method={self.method} url={self.url}"


class Manifest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoints: Tuple[Endpoint, ...] = ()

    def __len__(self) -> int:
        return len(self.endpoints)

    def dumps(self) -> str:
        """Serialize with four-space indentation; output is stable for equal manifests."""
        data = self.model_dump(mode="json", by_alias=True)
        return json.dumps(data, ensure_ascii=False, indent=4) + "\n"


def write_manifest(manifest: Manifest, path: Union[str, Path]) -> Path:
    """Сохраняет манифест целиком по указанному пути."""
    output = Path(path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(manifest.dumps(), encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot write monitor file={output} err={exc}") from exc
    logger.debug("Wrote %d endpoints to %s", len(manifest), output)
    return output


def read_manifest(path: Union[str, Path]) -> Manifest:
    """Читает и проверяет манифест; любая ошибка чтения или формата: ManifestError."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read monitor filename={source} err={exc}") from exc
    try:
        manifest = Manifest.model_validate_json(text)
    except ValidationError as exc:
        raise ManifestError(f"Cannot parse monitor filename={source} err={exc}") from exc
    logger.debug("Read %d endpoints from %s", len(manifest), source)
    return manifest
