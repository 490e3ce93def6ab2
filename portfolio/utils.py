"""
Slug helpers for portfolio URLs.
"""
import re
import unicodedata

from django.utils.crypto import get_random_string

SLUG_MAX_LENGTH = 50
SUFFIX_LENGTH = 5
SUFFIX_CHARS = 'abcdefghijklmnopqrstuvwxyz0123456789'
FALLBACK_SLUG = 'portfolio'

_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]+')


def generate_slug(name: str) -> str:
    """
    Turn a display name into a URL-safe slug.

    Lower-cases the name, strips diacritics, collapses every run of
    characters outside [a-z0-9] into a single dash and trims dashes from
    both ends. The result is at most 50 characters and may be empty.

        >>> generate_slug("Café Déjà-Vu!!")
        'cafe-deja-vu'
    """
    decomposed = unicodedata.normalize('NFD', name.lower().strip())
    without_marks = ''.join(char for char in decomposed if not unicodedata.category(char).startswith('M'))
    slug = _NON_ALPHANUMERIC.sub('-', without_marks).strip('-')
    return slug[:SLUG_MAX_LENGTH]


def unique_portfolio_slug(name: str) -> str:
    """
    Slug for a new portfolio. A base slug that is already taken gets a
    random base-36 suffix; a second collision is left to the unique
    constraint. Names without any slug characters fall back to "portfolio".
    """
    from .models import Portfolio

    base_slug = generate_slug(name) or FALLBACK_SLUG
    if Portfolio.objects.filter(slug=base_slug).exists():
        return f"{base_slug}-{get_random_string(SUFFIX_LENGTH, SUFFIX_CHARS)}"
    return base_slug
