"""Endpoint routers grouped by resource."""
