"""Core data types for project documents."""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _as_str_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (str, int, float, date)):
        return [_as_str(value)]
    return [_as_str(v) for v in value]


class TeamMember(BaseModel):
    """A collaborator shown on a project card.

    Keys beyond ``name`` and ``avatar`` (``role``, ``linkedIn``...) are kept.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = ""
    avatar: str = ""

    @field_validator("name", "avatar", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str:
        return _as_str(value)


class ProjectMetadata(BaseModel):
    """Recognized front-matter keys. Every key is always present."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = ""
    published_at: str = Field(default="", alias="publishedAt")
    summary: str = ""
    images: list[str] = Field(default_factory=list)
    image: str = ""
    tag: list[str] = Field(default_factory=list)
    team: list[TeamMember] = Field(default_factory=list)
    link: str = ""

    @field_validator("title", "published_at", "summary", "image", "link", mode="before")
    @classmethod
    def _scalar(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator("images", "tag", mode="before")
    @classmethod
    def _sequence(cls, value: Any) -> list[str]:
        return _as_str_list(value)

    @field_validator("team", mode="before")
    @classmethod
    def _team(cls, value: Any) -> Any:
        return value or []

    @classmethod
    def from_frontmatter(cls, data: dict[str, Any]) -> ProjectMetadata:
        """Build metadata from raw front matter, ignoring unrecognized keys."""
        return cls.model_validate({key: data.get(key) for key in _FRONTMATTER_KEYS if key in data})


_FRONTMATTER_KEYS = ("title", "publishedAt", "summary", "images", "image", "tag", "team", "link")


class Document(BaseModel):
    """A project write-up: slug, metadata and raw Markdown body."""

    model_config = ConfigDict(frozen=True)

    slug: str
    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)
    content: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ContentIndex(BaseModel):
    """The aggregated index, ``{"posts": [...]}``."""

    model_config = ConfigDict(frozen=True)

    posts: list[Document] = Field(default_factory=list)

    def get(self, slug: str) -> Document | None:
        return next((post for post in self.posts if post.slug == slug), None)

    def without(self, exclude: set[str] | frozenset[str]) -> ContentIndex:
        if not exclude:
            return self
        return ContentIndex(posts=[post for post in self.posts if post.slug not in exclude])

    def to_payload(self) -> dict[str, Any]:
        return {"posts": [post.to_payload() for post in self.posts]}

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), indent=2, ensure_ascii=False)
