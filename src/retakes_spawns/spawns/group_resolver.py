"""
Free-text group name resolution for admin commands.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .spawn import slugify


class GroupResolver:
    """
    Resolves admin input to an existing group's slug.

    Matching order, first hit wins:
    1. exact display name (case-insensitive)
    2. exact slug
    3. unique prefix of a slug (slugified input) or display name (raw input)

    Unresolved or ambiguous input yields None; groups are never created here.
    """

    def __init__(self, groups: Iterable[str]):
        self._candidates: List[Tuple[str, str]] = [(name, slugify(name)) for name in groups]

    def _match(self, text: str) -> Optional[Tuple[str, str]]:
        text = text.strip()
        if not text or not self._candidates:
            return None

        folded = text.casefold()
        slug_in = slugify(text)

        for candidate in self._candidates:
            if candidate[0].casefold() == folded:
                return candidate

        if slug_in:
            # Several groups may share a slug; that is ambiguous, not a match
            exact = [c for c in self._candidates if c[1] == slug_in]
            if len(exact) == 1:
                return exact[0]
            if exact:
                return None

        matches = [
            (name, slug) for name, slug in self._candidates
            if (slug_in and slug.startswith(slug_in)) or name.casefold().startswith(folded)
        ]
        if len(matches) == 1:
            return matches[0]
        return None

    def resolve(self, text: str) -> Optional[str]:
        match = self._match(text)
        return match[1] if match else None

    def resolve_name(self, text: str) -> Optional[str]:
        """Resolve input straight to the canonical display name of the matched group."""
        match = self._match(text)
        return match[0] if match else None

    def display_name(self, slug: str) -> Optional[str]:
        """Get the display name for a slug, or None if no single group has it."""
        names = [name for name, s in self._candidates if s == slug]
        return names[0] if len(names) == 1 else None
