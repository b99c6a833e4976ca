"""Permalink generation for shared scripts.

A permalink is a slug of the script title, e.g. ``hello-world``. When that
slug is taken the caller asks for another one, which keeps the stem and adds
a random suffix: ``hello-world_k3x9qa``. Uniqueness is checked by the caller.
"""

import hashlib
import random
import re
import string
import unicodedata

SUFFIX_SEPARATOR = "_"


def slugify(text: str, max_length: int) -> str:
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-")


class PermalinkGenerator:
    max_length = 60
    suffix_length = 6
    alphabet = string.ascii_lowercase + string.digits

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.SystemRandom()

    def generate(self, title: str, source: str = "") -> str:
        slug = slugify(title, self.max_length)
        if not slug:
            # titles made only of symbols, fall back to the content
            slug = hashlib.sha1(source.encode("utf-8")).hexdigest()[:8]
        return slug

    def regenerate(self, permalink: str) -> str:
        stem = permalink.split(SUFFIX_SEPARATOR, 1)[0]
        suffix = "".join(
            self._rng.choice(self.alphabet) for _ in range(self.suffix_length)
        )
        return f"{stem}{SUFFIX_SEPARATOR}{suffix}"


def get_permalink_generator() -> PermalinkGenerator:
    return PermalinkGenerator()
