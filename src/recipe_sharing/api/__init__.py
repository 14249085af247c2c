"""HTTP API: routers, endpoints and their dependencies."""
