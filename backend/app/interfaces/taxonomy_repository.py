"""
Taxonomy repository interface (tags and categories).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.blog import TaxonomyCreate, TaxonomyTerm


class ITaxonomyRepository(ABC):
    """Abstract interface for a flat list of named terms."""

    @abstractmethod
    async def create(self, term: TaxonomyCreate) -> TaxonomyTerm:
        """Create a new term."""
        pass

    @abstractmethod
    async def list(self) -> list[TaxonomyTerm]:
        """List all terms sorted by name."""
        pass
