from __future__ import annotations

import re

from mobichat.domain.entities.language import Language

_ARABIC_SCRIPT = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]")


def detect_language(text: str, default: Language = Language.fr) -> Language:
    """Arabic script anywhere in the text means Arabic; otherwise the default."""
    if _ARABIC_SCRIPT.search(text or ""):
        return Language.ar
    return default


def resolve_language(configured: str, text: str) -> Language:
    if configured.lower() == "auto":
        return detect_language(text)
    return Language(configured.lower())
