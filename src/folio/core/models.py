"""Data models for content resources, posts, and site documents"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ContentResource:
    """Raw bytes of a named resource as returned by a content backend."""
    name: str
    path:  str           # backend-relative path (file path or blob pathname)
    data:  bytes


class PostFrontmatter(BaseModel):
    """Post metadata; unknown keys are kept as extra fields."""
    model_config = ConfigDict(extra="allow")

    title:   Optional[str] = None
    date:    Optional[str] = None
    tags:    list[str] = []
    excerpt: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, v: Any) -> Any:
        # YAML loads bare dates as date/datetime objects
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v

    @field_validator("title", "excerpt", mode="before")
    @classmethod
    def _scalar_to_str(cls, v: Any) -> Any:
        # `title: 2024` loads as an int
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if isinstance(v, list):
            return [str(t) for t in v]
        return v

    @classmethod
    def lenient(cls, data: Any) -> "PostFrontmatter":
        """Build frontmatter, dropping only the fields that fail validation."""
        if not isinstance(data, dict):
            return cls()
        data = dict(data)
        while True:
            try:
                return cls.model_validate(data)
            except ValidationError as e:
                bad = {err["loc"][0] for err in e.errors() if err["loc"] and err["loc"][0] in data}
                if not bad:
                    return cls()
                for key in bad:
                    del data[key]

    def parsed_date(self) -> Optional[datetime]:
        """Date as an aware UTC datetime, or None when missing or unparseable."""
        if not self.date:
            return None
        try:
            dt = datetime.fromisoformat(self.date.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    def sort_key(self) -> datetime:
        """Parsed date, or EPOCH so undated posts sort as the oldest."""
        return self.parsed_date() or EPOCH


class PostSummary(BaseModel):
    slug:        str
    frontmatter: PostFrontmatter


class Post(PostSummary):
    html: str


# --- site / profile documents ---

class _Document(BaseModel):
    """Pass-through JSON document: camelCase on the wire, extra keys kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel, frozen=True)


class NavItem(_Document):
    label: str = ""
    href:  str = ""
    is_highlighted: bool = False


class SiteData(_Document):
    name:    str = ""
    tagline: str = ""
    nav:     list[NavItem] = []
    socials: dict[str, str] = {}
    footer_links: list[NavItem] = []
    resume:  str = ""
    email:   str = ""
    address: str = ""


class HeroButton(_Document):
    label: str = ""
    href:  str = ""


class HeroImage(_Document):
    alt: str = ""
    src: str = ""


class Hero(_Document):
    title:       str = ""
    position:    str = ""
    description: str = ""
    buttons:     list[HeroButton] = []
    image:       Optional[HeroImage] = None


class Experience(_Document):
    company: str = ""
    logo:    str = ""
    role:    str = ""
    range:   str = ""
    details: list[str] = []
    stack:   list[str] = []


class SkillGroup(_Document):
    title: str = ""
    color: str = ""
    icon:  str = ""
    items: list[str] = []


class Education(_Document):
    school:   str = ""
    degree:   str = ""
    range:    str = ""
    location: str = ""
    logo:     str = ""
    details:  str = ""


class ProfileContent(_Document):
    hero:       Optional[Hero] = None
    experience: list[Experience] = []
    skills:     list[SkillGroup] = []
    education:  list[Education] = []
