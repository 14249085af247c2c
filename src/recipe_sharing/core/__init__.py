"""Core application wiring: configuration, lifespan, errors, middleware."""
