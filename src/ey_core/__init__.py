"""ey-core: Engine Yard core cookbook - dependency manifest and timezone linker."""

__version__ = "0.1.0"
