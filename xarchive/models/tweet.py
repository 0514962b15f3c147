"""Tweet data models."""

from pydantic import BaseModel, ConfigDict, Field


class UrlEntity(BaseModel):
    """A shortened link and its expansion, from ``entities.urls``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    short_url: str | None = Field(default=None, alias="url")
    expanded_url: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.short_url) and bool(self.expanded_url)


class CanonicalTweet(BaseModel):
    """Stable projection of an archived tweet."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    display_name: str = Field(default="", alias="displayName")
    username: str = ""
    text: str = ""
    created_at: str | None = Field(default=None, alias="createdAt")

    @property
    def uri(self) -> str:
        return f"tweet://{self.id}"

    def to_payload(self) -> dict:
        """Dump using the wire field names."""
        return self.model_dump(by_alias=True)
