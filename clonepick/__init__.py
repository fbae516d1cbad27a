"""clonepick - collect, pick and clone repositories from code hosting servers."""

__version__ = "0.1.0"
