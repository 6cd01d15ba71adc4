from .utm import UtmLinkBuilder

__all__ = ["UtmLinkBuilder"]
