"""Discovery modules."""

from .plugins_api import CatalogueFetchError, fetch_author_plugins, sort_and_limit

__all__ = ["CatalogueFetchError", "fetch_author_plugins", "sort_and_limit"]
