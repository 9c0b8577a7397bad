"""Site profile: the person, their links and the page copy.

The profile is read once from ``site.yaml`` and handed to whatever needs it
(the web app keeps it on ``app.state``). A missing file yields an empty
profile so a fresh checkout still serves pages.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from folio.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class Person(BaseModel):
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    avatar: str = ""
    email: str = ""
    location: str = Field(default="", description="IANA time zone, e.g. 'Europe/Vienna'")
    languages: list[str] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class SocialLink(BaseModel):
    name: str
    icon: str = ""
    link: str


class HomePage(BaseModel):
    title: str = ""
    description: str = ""
    headline: str = ""
    subline: str = ""
    featured_href: str = ""
    featured_count: int = Field(default=6, ge=0)
    carousel_interval_ms: int = Field(default=5000, gt=0)


class WorkPage(BaseModel):
    title: str = "Projects"
    description: str = ""
    hidden_projects: list[str] = Field(default_factory=list)
    wide_image_slugs: list[str] = Field(default_factory=list)
    related_count: int = Field(default=2, ge=0)


class Experience(BaseModel):
    company: str
    role: str = ""
    timeframe: str = ""
    achievements: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class ExperienceSection(BaseModel):
    display: bool = True
    title: str = "Work Experience"
    experiences: list[Experience] = Field(default_factory=list)


class Institution(BaseModel):
    name: str
    description: list[str] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _wrap_scalar(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class StudiesSection(BaseModel):
    display: bool = True
    title: str = "Studies"
    institutions: list[Institution] = Field(default_factory=list)


class SiteProfile(BaseModel):
    """Everything a page needs besides the project documents."""

    base_url: str = ""
    person: Person = Field(default_factory=Person)
    social: list[SocialLink] = Field(default_factory=list)
    home: HomePage = Field(default_factory=HomePage)
    work: WorkPage = Field(default_factory=WorkPage)
    experience: ExperienceSection = Field(default_factory=ExperienceSection)
    studies: StudiesSection = Field(default_factory=StudiesSection)

    @property
    def site_title(self) -> str:
        if self.home.title:
            return self.home.title
        return f"{self.person.name}'s Portfolio" if self.person.name else "Portfolio"


def load_site_profile(path: Path) -> SiteProfile:
    """Load the site profile from ``path``.

    Raises:
        ConfigValidationError: If the file is not valid YAML or fails validation.

    """
    if not path.is_file():
        logger.info("No site profile at %s; using defaults", path)
        return SiteProfile()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigValidationError(path, [{"msg": str(exc)}]) from exc
    if not isinstance(data, dict):
        raise ConfigValidationError(path, [{"msg": "site profile must be a mapping"}])

    try:
        return SiteProfile.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(path, exc.errors()) from exc
