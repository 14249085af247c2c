"""Recipe sharing service: a REST API for recipes, users and comments."""

__version__ = "0.1.0"
