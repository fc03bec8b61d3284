"""Data models for the Google Cloud inventory resolver."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ResolveConfig(BaseModel):
    """Parameters for a single inventory resolution."""

    model_config = ConfigDict(extra="ignore")

    project: str = Field(..., min_length=1, description="Google Cloud project to list")
    zone: str = Field(..., min_length=1, description="Compute zone, e.g. us-west1-b")
    credentials: str | None = Field(
        default=None, description="Path to the service account JSON key"
    )
    target_mapping: dict[str, Any] = Field(
        ..., description="Output field name -> dotted path into each instance"
    )
    base_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("base_dir", "_boltdir"),
        description="Directory relative credential paths resolve against",
    )
    verify_project: bool = Field(
        default=False,
        description="Reject credentials whose project_id differs from project",
    )


class Credentials(BaseModel):
    """Service account key loaded from disk.

    Unknown keys from the key file are kept so the model round-trips the file.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    client_email: str
    private_key: str
    token_uri: str
    project_id: str | None = None


class AccessToken(BaseModel):
    """Bearer token returned by the OAuth token endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


class PageResponse(BaseModel):
    """One page of a Compute API list response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[Any] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None, alias="nextPageToken")
    self_link: str | None = Field(default=None, alias="selfLink")

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("next_page_token", "self_link", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return str(value)
