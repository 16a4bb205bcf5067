"""Input sanitization and validation utilities."""

import re
import bleach


# Maximum lengths for different field types
MAX_LENGTHS = {
    "name": 100,
    "username": 50,
    "email": 255,
    "title": 200,
    "description": 5000,
    "content": 2000,
    "default": 255,
}

# Allowed characters patterns
PATTERNS = {
    "email": re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"),
    "username": re.compile(r"^[a-z0-9_.]+$"),
}


def sanitize_string(
    value: str,
    max_length: int = MAX_LENGTHS["default"],
    strip_html: bool = True,
    allow_newlines: bool = False,
) -> str:
    """
    Sanitize a string input.

    - Strips leading/trailing whitespace
    - Removes or escapes HTML
    - Truncates to max length
    - Optionally removes newlines
    """
    if not value:
        return ""

    # Strip whitespace
    value = value.strip()

    # Remove HTML tags if requested
    if strip_html:
        value = bleach.clean(value, tags=[], strip=True)

    # Remove or normalize newlines
    if not allow_newlines:
        value = " ".join(value.split())

    # Truncate to max length
    if len(value) > max_length:
        value = value[:max_length]

    return value


def sanitize_name(value: str) -> str:
    """Sanitize a name field (full name, playlist name)."""
    return sanitize_string(value, max_length=MAX_LENGTHS["name"])


def sanitize_username(value: str) -> str:
    """Usernames are stored lower-cased."""
    return sanitize_string(value, max_length=MAX_LENGTHS["username"]).lower()


def validate_username(value: str) -> bool:
    if not value or len(value) > MAX_LENGTHS["username"]:
        return False
    return bool(PATTERNS["username"].match(value))


def sanitize_email(value: str) -> str:
    """Sanitize and validate email."""
    value = sanitize_string(value, max_length=MAX_LENGTHS["email"]).lower()
    return value


def validate_email(value: str) -> bool:
    """Validate email format."""
    if not value or len(value) > MAX_LENGTHS["email"]:
        return False
    return bool(PATTERNS["email"].match(value))


def sanitize_title(value: str) -> str:
    return sanitize_string(value, max_length=MAX_LENGTHS["title"])


def sanitize_description(value: str) -> str:
    """Sanitize a description field (allows newlines)."""
    return sanitize_string(
        value,
        max_length=MAX_LENGTHS["description"],
        allow_newlines=True,
    )


def sanitize_content(value: str) -> str:
    """Sanitize user-authored text such as comments and tweets."""
    return sanitize_string(
        value,
        max_length=MAX_LENGTHS["content"],
        allow_newlines=True,
    )
