"""Article page fetching and metadata extraction."""

from src.metadata.client import MetadataFetcher
from src.metadata.extractor import extract_metadata
from src.metadata.models import ArticleMetadata, fallback_metadata, parse_note_url


__all__ = [
    "ArticleMetadata",
    "MetadataFetcher",
    "extract_metadata",
    "fallback_metadata",
    "parse_note_url",
]
