"""Constants for article metadata extraction."""

# HTTP status range treated as success
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300

# Placeholders when a page says nothing useful
UNTITLED = "Untitled"
UNKNOWN_URLNAME = "unknown"

# Estimation heuristics: the article body is not parsed, so length is
# guessed from the excerpt
WORDS_PER_EXCERPT_CHAR = 8
DEFAULT_WORD_COUNT = 1000
WORDS_PER_MINUTE = 500
MIN_READING_TIME_MINUTES = 1

MAX_HASHTAGS = 10

# Raw-HTML markers of a paywalled article
PAID_MARKERS: tuple[str, ...] = ('"is_limited":true', "note-premium")

DEFAULT_ACCEPT = "text/html,application/xhtml+xml"
DEFAULT_ACCEPT_LANGUAGE = "ja,en;q=0.9"
