"""Application layer for the sites bounded context."""
