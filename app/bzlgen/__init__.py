"""bzlgen - conditional values and Starlark declaration emitter."""

__version__ = "0.1.0"
