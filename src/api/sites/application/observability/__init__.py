"""Domain-Oriented Observability for the sites application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from sites.application.observability.context_query_service_probe import (
    ContextQueryServiceProbe,
    DefaultContextQueryServiceProbe,
)
from sites.application.observability.site_config_resolver_probe import (
    DefaultSiteConfigResolverProbe,
    SiteConfigResolverProbe,
)

__all__ = [
    "SiteConfigResolverProbe",
    "DefaultSiteConfigResolverProbe",
    "ContextQueryServiceProbe",
    "DefaultContextQueryServiceProbe",
]
