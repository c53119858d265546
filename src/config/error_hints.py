"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "int_type": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "int_parsing": "This field must be an integer (whole number).",
    "string_type": "This field must be a text string.",
    "tuple_type": "This field must be a two-element list, e.g. [6, 9].",
    "greater_than": "The value is too small. It must be above the minimum.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_pattern_mismatch": "The format is invalid. Use MAJOR.MINOR, e.g. '1.0'.",
    "extra_forbidden": "Unknown key. Check the spelling against the documented keys.",
    "value_error": "The combination of values is inconsistent. Check related fields.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "freshness_decay_days": "Days until freshness reaches 0 (default 60).",
    "priority_cap": "Must be above 0.0 and at most 1.0.",
    "morning_window": "A [start_hour, end_hour) pair within 0-24, e.g. [6, 9].",
    "lunch_window": "A [start_hour, end_hour) pair within 0-24, e.g. [12, 14].",
    "queue_size": "Number of articles in the read-next queue (default 3).",
    "low_freshness_threshold": "Must not exceed archive_freshness_threshold.",
    "top_n": "Must be between 1 and 100.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'extra_forbidden').
        field_name: Optional field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'scoring.priority_cap' -> 'priority_cap'; tuple items end in an index
        parts = [p for p in field_name.split(".") if not p.isdigit()]
        if parts and parts[-1] in FIELD_HINTS:
            return FIELD_HINTS[parts[-1]]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'queue.queue_size').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
