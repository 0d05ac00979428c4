"""solid-scaffold: generate a SOLID layer around an existing Laravel model."""

__version__ = "0.1.0"
