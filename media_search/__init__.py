"""media-search: field-weighted, folder-scoped search for a media library."""

__version__ = "0.1.0"
