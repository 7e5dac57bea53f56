"""docindex — implementor registry and sidebar index for generated documentation pages."""

__version__ = "0.1.0"
