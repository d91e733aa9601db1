"""conduit-api: HTTP request pipeline for the Conduit publishing service."""

__version__ = "1.0.0"
