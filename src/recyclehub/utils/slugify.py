"""Slugify utility functions.

This module provides functions to convert strings into URL-friendly slugs, typically
used for creating SEO-friendly URLs, storage keys and identifiers.

Every text-accepting function is total: empty, missing or non-string input
yields ``""`` instead of raising. Only ``generate_unique_slug`` touches the
outside world, through the existence check supplied by the caller.
"""

from __future__ import annotations

import random
import re
import string
from datetime import UTC, date, datetime
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Final

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from recyclehub.core.config import get_settings
from recyclehub.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable


logger = get_logger(__name__)

DEFAULT_SEPARATOR: Final[str] = "-"
DEFAULT_MAX_LENGTH: Final[int] = 100
SEO_MAX_LENGTH: Final[int] = 60
RANDOM_SUFFIX_LENGTH: Final[int] = 6
FALLBACK_FILENAME: Final[str] = "file"

_SUFFIX_ALPHABET: Final[str] = string.ascii_lowercase + string.digits
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_EXTENSION_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9]+")

# Shared non-cryptographic generator for collision-avoidance suffixes
_suffix_random = random.Random()


class SlugError(Exception):
    """Base exception for slug generation errors."""


class SlugGenerationExhaustedError(SlugError):
    """Raised when every candidate of a bounded uniqueness search is taken."""

    def __init__(self, base_slug: str, attempts: int) -> None:
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"No free slug found for '{base_slug}' after {attempts} attempts"
        )


class SlugOptions(BaseModel):
    """Slug transformation policy.

    Validated once at construction and immutable afterwards, so a bad
    separator or length is reported where the options are built rather
    than in the middle of a transform.
    """

    model_config = ConfigDict(frozen=True)

    lowercase: bool = True
    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1, max_length=1)
    max_length: PositiveInt = DEFAULT_MAX_LENGTH
    remove_special_chars: bool = True

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        # Letters of any script would be stripped or recased on a second pass
        if value.isspace() or value.isalnum() or value.lower() != value:
            msg = "separator must be a single non-alphanumeric, non-space character"
            raise ValueError(msg)
        return value

    def merged_over(self, base: SlugOptions) -> SlugOptions:
        """Return ``base`` with the fields explicitly set on this instance applied."""
        return base.model_copy(update=self.model_dump(exclude_unset=True))


DEFAULT_OPTIONS: Final[SlugOptions] = SlugOptions()
SEO_OPTIONS: Final[SlugOptions] = SlugOptions(max_length=SEO_MAX_LENGTH)


@lru_cache(maxsize=32)
def _compile_patterns(separator: str) -> tuple[re.Pattern[str], ...]:
    sep = re.escape(separator)
    return (
        re.compile(rf"[^\w{sep}]+", re.ASCII),
        re.compile(rf"{sep}{{2,}}"),
        re.compile(rf"^{sep}+|{sep}+$"),
    )


def slugify(text: Any, options: SlugOptions | None = None) -> str:
    """Convert text into a URL-safe slug.

    Steps, in order: trim, optionally lowercase, turn whitespace runs into
    the separator, optionally drop everything that is not an ASCII word
    character or the separator, collapse repeated separators, strip them
    from both ends, then truncate to ``max_length`` without leaving a
    dangling separator.

    Args:
        text: Text to slugify. Non-string or empty values produce "".
        options: Transformation policy; defaults to ``DEFAULT_OPTIONS``.

    Returns:
        The slug, possibly empty.

    Example:
    >>> slugify("Hello   World!!")
    'hello-world'
    >>> slugify("Old iPhones", SlugOptions(separator="_"))
    'old_iphones'
    """
    if not text or not isinstance(text, str):
        return ""

    config = options or DEFAULT_OPTIONS
    sep = config.separator
    special_re, repeat_re, edge_re = _compile_patterns(sep)

    slug = text.strip()
    if config.lowercase:
        slug = slug.lower()

    slug = _WHITESPACE_RE.sub(sep, slug)

    if config.remove_special_chars:
        slug = special_re.sub("", slug)

    slug = repeat_re.sub(sep, slug)
    slug = edge_re.sub("", slug)

    if len(slug) > config.max_length:
        slug = slug[: config.max_length].rstrip(sep)

    return slug


async def generate_unique_slug(
    base_slug: str,
    check_exists: Callable[[str], Awaitable[bool]],
    *,
    max_attempts: int | None = None,
) -> str:
    """Find the first free slug among ``base``, ``base-1``, ``base-2``, ...

    Candidates are checked one at a time, in counter order, so the result is
    reproducible for a given store state.

    Args:
        base_slug: Slug to start from.
        check_exists: Async predicate returning True when a candidate is taken.
        max_attempts: Maximum number of candidates to check. Defaults to the
            ``slug.unique_max_attempts`` setting.

    Returns:
        The first candidate for which ``check_exists`` returned False.

    Raises:
        SlugGenerationExhaustedError: If ``max_attempts`` candidates were all taken.
    """
    if max_attempts is None:
        max_attempts = get_settings().slug.unique_max_attempts
    elif max_attempts <= 0:
        msg = "max_attempts must be positive"
        raise ValueError(msg)

    candidate = base_slug
    counter = 1
    attempts = 0

    while True:
        attempts += 1
        if not await check_exists(candidate):
            if counter > 1:
                logger.debug(
                    "Resolved slug collision",
                    base_slug=base_slug,
                    slug=candidate,
                    attempts=attempts,
                )
            return candidate
        if attempts >= max_attempts:
            logger.warning(
                "Slug uniqueness search exhausted",
                base_slug=base_slug,
                attempts=attempts,
            )
            raise SlugGenerationExhaustedError(base_slug, attempts)
        candidate = f"{base_slug}{DEFAULT_SEPARATOR}{counter}"
        counter += 1


def slugify_with_date(title: Any, when: date | datetime | None = None) -> str:
    """Prefix the title slug with an ISO ``YYYY-MM-DD`` date.

    Aware datetimes are converted to UTC first; naive datetimes and plain
    dates are used as given. ``when`` defaults to the current UTC time.
    """
    title_slug = slugify(title)
    if not title_slug:
        return ""

    if when is None:
        when = datetime.now(UTC)
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(UTC)
        when = when.date()

    return f"{when.isoformat()}{DEFAULT_SEPARATOR}{title_slug}"


def combine_slug_parts(parts: Iterable[Any], separator: str = DEFAULT_SEPARATOR) -> str:
    """Slugify each part on its own and join the non-empty results.

    >>> combine_slug_parts(["Electronics", "Old iPhones!"])
    'electronics-old-iphones'
    """
    options = SlugOptions(separator=separator)
    slugs = (slugify(part, options) for part in parts)
    return separator.join(s for s in slugs if s)


def unslugify(slug: Any, separator: str = DEFAULT_SEPARATOR) -> str:
    """Turn a slug back into readable words.

    Best effort only: casing beyond the first letter and any characters
    dropped by ``slugify`` cannot be recovered.

    >>> unslugify("my-cool-post")
    'My Cool Post'
    """
    if not slug or not isinstance(slug, str):
        return ""

    return " ".join(word[:1].upper() + word[1:] for word in slug.split(separator))


def categorized_slug(category: Any, title: Any) -> str:
    """Build a ``category/title`` path from two independent slugs."""
    return f"{slugify(category)}/{slugify(title)}"


def sanitize_filename(filename: Any, separator: str = DEFAULT_SEPARATOR) -> str:
    """Make an uploaded filename safe for storage.

    The last dot-separated segment is kept as a lowercased extension when it
    is plain ASCII alphanumerics, and the rest is slugified. Anything else
    after the last dot (``/etc/passwd``, spaces) means the name has no
    extension and is slugified as a whole, without a dot. A name whose slug
    is empty becomes ``file``.

    >>> sanitize_filename("My Photo.JPG")
    'my-photo.jpg'
    >>> sanitize_filename("README")
    'readme'
    >>> sanitize_filename("!!!.jpg")
    'file.jpg'
    """
    if not filename or not isinstance(filename, str):
        return ""

    options = SlugOptions(separator=separator)
    name = filename.strip()
    stem, _, extension = name.rpartition(".")

    if not stem or not _EXTENSION_RE.fullmatch(extension):
        return slugify(name, options) or FALLBACK_FILENAME

    return f"{slugify(stem, options) or FALLBACK_FILENAME}.{extension.lower()}"


def generate_seo_path(text: Any, options: SlugOptions | None = None) -> str:
    """Slugify with the tighter SEO length limit.

    Fields explicitly set on ``options`` override the SEO defaults, so
    ``SlugOptions(separator="_")`` keeps the 60 character cap while
    ``SlugOptions(max_length=80)`` lifts it.
    """
    seo_options = options.merged_over(SEO_OPTIONS) if options else SEO_OPTIONS
    return slugify(text, seo_options)


def slugify_with_random_suffix(
    text: Any,
    suffix_length: int = RANDOM_SUFFIX_LENGTH,
) -> str:
    """Append a random lowercase alphanumeric suffix to the slug.

    The suffix only makes collisions unlikely; it comes from a
    non-cryptographic generator and must not be used as a secret or token.
    """
    base_slug = slugify(text)
    if not base_slug:
        return ""
    if suffix_length <= 0:
        return base_slug

    suffix = "".join(_suffix_random.choices(_SUFFIX_ALPHABET, k=suffix_length))
    return f"{base_slug}{DEFAULT_SEPARATOR}{suffix}"


__all__ = [
    "DEFAULT_OPTIONS",
    "SEO_OPTIONS",
    "SlugError",
    "SlugGenerationExhaustedError",
    "SlugOptions",
    "categorized_slug",
    "combine_slug_parts",
    "generate_seo_path",
    "generate_unique_slug",
    "sanitize_filename",
    "slugify",
    "slugify_with_date",
    "slugify_with_random_suffix",
    "unslugify",
]
