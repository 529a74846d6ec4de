"""Site identity and profile documents"""

from folio.content.store import ContentStore, read_json
from folio.core.models import ProfileContent, SiteData


SITE_RESOURCE = "site.json"
PROFILE_RESOURCE = "profile.json"


def get_site(store: ContentStore) -> SiteData:
    return SiteData.model_validate(read_json(store, SITE_RESOURCE) or {})


def get_profile(store: ContentStore) -> ProfileContent:
    """Profile document; an empty or null document yields an empty profile."""
    return ProfileContent.model_validate(read_json(store, PROFILE_RESOURCE) or {})
