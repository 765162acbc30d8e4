"""Sites bounded context.

Resolves a tenant identifier into the configuration every storefront render
needs (domain, publish status, theme, country pack), and exposes the
tenant-scoped context entries stored alongside it in the single table.
"""
