"""Supported phone models."""

import re
from typing import Optional

from .models import PhoneProfile

DEFAULT_MODEL = "iphone16pro"

_SEPARATORS = re.compile(r"[\s\-_]")


def normalize_key(value: Optional[str]) -> str:
    """Lower-case a model/style key and drop whitespace, hyphens and underscores."""
    return _SEPARATORS.sub("", (value or "").lower())


PHONE_PROFILES: dict[str, PhoneProfile] = {
    profile.id: profile
    for profile in (
        PhoneProfile("iphone16promax", "iPhone 16 Pro Max", 1320, 2868),
        PhoneProfile("iphone16pro", "iPhone 16 Pro", 1206, 2622),
        PhoneProfile("iphone16plus", "iPhone 16 Plus", 1290, 2796),
        PhoneProfile("iphone16", "iPhone 16", 1170, 2532),
        PhoneProfile("iphone15promax", "iPhone 15 Pro Max", 1290, 2796),
        PhoneProfile("iphone15pro", "iPhone 15 Pro", 1179, 2556),
        PhoneProfile("iphone15", "iPhone 15", 1170, 2532),
        PhoneProfile("iphone14promax", "iPhone 14 Pro Max", 1290, 2796),
        PhoneProfile("iphone14pro", "iPhone 14 Pro", 1179, 2556),
        PhoneProfile("iphone14", "iPhone 14", 1170, 2532),
        PhoneProfile("iphonese", "iPhone SE", 750, 1334),
        PhoneProfile("pixel9pro", "Pixel 9 Pro", 1344, 2992),
        PhoneProfile("pixel9", "Pixel 9", 1080, 2400),
        PhoneProfile("pixel8pro", "Pixel 8 Pro", 1344, 2992),
        PhoneProfile("pixel8", "Pixel 8", 1080, 2400),
        PhoneProfile("galaxys24ultra", "Galaxy S24 Ultra", 1440, 3120),
        PhoneProfile("galaxys24", "Galaxy S24", 1080, 2340),
        PhoneProfile("galaxys23ultra", "Galaxy S23 Ultra", 1440, 3088),
        PhoneProfile("galaxys23", "Galaxy S23", 1080, 2340),
    )
}


def resolve_phone(model: Optional[str]) -> PhoneProfile:
    """Look up a phone profile, falling back to the default model."""
    return PHONE_PROFILES.get(normalize_key(model), PHONE_PROFILES[DEFAULT_MODEL])
