"""Unit tests for core/models.py"""

from datetime import date, datetime, timezone

from folio.core.models import EPOCH, PostFrontmatter, ProfileContent, SiteData


def test_frontmatter_lenient_defaults_on_bad_types():
    """A field of the wrong type degrades to its default; the rest is kept."""
    fm = PostFrontmatter.lenient({"title": ["not", "a", "string"], "date": date(2024, 5, 1), "cover": "/c.png"})
    assert fm.title is None
    assert fm.tags == []
    assert fm.date == "2024-05-01"
    assert fm.model_extra == {"cover": "/c.png"}


def test_frontmatter_scalar_title_and_excerpt_become_strings():
    """Numeric or date titles from YAML are kept as text."""
    fm = PostFrontmatter.lenient({"title": 2024, "excerpt": 1.5, "date": date(2024, 5, 1)})
    assert fm.title == "2024"
    assert fm.excerpt == "1.5"
    assert fm.date == "2024-05-01"
    assert PostFrontmatter.lenient({"title": date(2024, 1, 5)}).title == "2024-01-05"


def test_frontmatter_lenient_non_mapping():
    """A non-mapping header yields defaults."""
    assert PostFrontmatter.lenient("oops") == PostFrontmatter()


def test_frontmatter_date_objects_become_iso():
    """YAML date/datetime objects are stored as ISO strings."""
    assert PostFrontmatter.lenient({"date": date(2024, 1, 5)}).date == "2024-01-05"
    assert PostFrontmatter.lenient({"date": datetime(2024, 1, 5, 9, 30)}).date == "2024-01-05T09:30:00"


def test_frontmatter_comma_separated_tags():
    """A comma-separated tag string is split into a list."""
    assert PostFrontmatter.lenient({"tags": "a, b ,c"}).tags == ["a", "b", "c"]


def test_frontmatter_keeps_extra_keys():
    """Unknown frontmatter keys are preserved."""
    fm = PostFrontmatter.lenient({"title": "T", "cover": "/c.png"})
    assert fm.model_dump()["cover"] == "/c.png"


def test_sort_key_parses_dates():
    """sort_key returns an aware datetime for valid dates."""
    assert PostFrontmatter(date="2024-03-01").sort_key() == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert PostFrontmatter(date="2024-03-01T10:00:00Z").sort_key() == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)


def test_sort_key_epoch_for_missing_or_bad_dates():
    """Missing or unparseable dates sort as the Unix epoch."""
    assert PostFrontmatter().sort_key() == EPOCH
    assert PostFrontmatter(date="someday").sort_key() == EPOCH
    assert PostFrontmatter(date="someday").parsed_date() is None


def test_site_data_camel_case_aliases():
    """SiteData reads camelCase keys and dumps them back by alias."""
    site = SiteData.model_validate({"name": "Jo", "footerLinks": [{"label": "CV", "href": "/cv", "isHighlighted": True}]})
    assert site.footer_links[0].is_highlighted is True
    assert site.model_dump(by_alias=True)["footerLinks"][0]["isHighlighted"] is True


def test_profile_empty_document():
    """An empty profile document is valid and has no sections."""
    profile = ProfileContent.model_validate({})
    assert profile.hero is None
    assert profile.experience == []
