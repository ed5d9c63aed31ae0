"""Catalog access: query building and cursor-following pagination."""

from satnogsctl.catalog.walker import CatalogWalker, build_query_url, find_next_url

__all__ = ["CatalogWalker", "build_query_url", "find_next_url"]
