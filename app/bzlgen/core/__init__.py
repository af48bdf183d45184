"""Core services: Starlark rendering, serialization, settings and loading."""
