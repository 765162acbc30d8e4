"""Application services for the sites bounded context.

Application services orchestrate the tenant record store and the country
pack registry to fulfill use cases. They are the "front door" to the
sites context.
"""

from sites.application.services.context_query_service import ContextQueryService
from sites.application.services.site_config_resolver import (
    SiteConfigResolver,
    normalize_host,
)

__all__ = [
    "ContextQueryService",
    "SiteConfigResolver",
    "normalize_host",
]
