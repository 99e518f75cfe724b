# =============================================================================
# core/services/scheme_catalog.py - Scheme Catalog
# =============================================================================
# Read-only access to the schemes table plus the startup seed.
# =============================================================================

import logging
from typing import Iterable
from uuid import UUID

from supabase import Client

from app.exceptions import PersistenceError
from core.models.scheme import Scheme, SchemeCreate
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

SCHEMES_TABLE = "schemes"


class SchemeCatalog:
    """Service for the scheme catalog."""

    def __init__(self, client: Client):
        self.client = client

    def list_schemes(self) -> list[Scheme]:
        """
        Return every scheme in storage (insertion) order.

        No pagination: the catalog is small reference data.
        """
        try:
            response = (
                self.client.table(SCHEMES_TABLE)
                .select("*")
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise PersistenceError("list schemes", str(e))

        return [Scheme.model_validate(row) for row in response.data or []]

    def get(self, scheme_id: UUID | str) -> Scheme | None:
        """Fetch one scheme, or None if the id is unknown."""
        try:
            response = (
                self.client.table(SCHEMES_TABLE)
                .select("*")
                .eq("id", normalize_uuid(scheme_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("look up scheme", str(e))

        if not response.data:
            return None
        return Scheme.model_validate(response.data[0])

    def get_many(self, scheme_ids: Iterable[UUID | str]) -> dict[str, Scheme]:
        """
        Fetch several schemes at once.

        Returns:
            Mapping of scheme id (string) to Scheme; unknown ids are absent
        """
        ids = sorted({normalize_uuid(s) for s in scheme_ids})
        if not ids:
            return {}

        try:
            response = (
                self.client.table(SCHEMES_TABLE)
                .select("*")
                .in_("id", ids)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("look up schemes", str(e))

        schemes = [Scheme.model_validate(row) for row in response.data or []]
        return {str(s.id): s for s in schemes}

    def count(self) -> int:
        try:
            response = (
                self.client.table(SCHEMES_TABLE)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("count schemes", str(e))

        return response.count or 0

    def seed_if_empty(self, defaults: list[SchemeCreate]) -> int:
        """
        Insert the default schemes when the catalog is empty.

        Idempotent: a non-empty catalog is left untouched.

        Returns:
            Number of schemes inserted (0 if the catalog already had entries)
        """
        if self.count() > 0:
            logger.debug("Scheme catalog already populated; skipping seed")
            return 0

        rows = []
        for scheme in defaults:
            row = scheme.model_dump()
            row["created_at"] = utc_now_iso()
            rows.append(row)

        if not rows:
            return 0

        try:
            response = self.client.table(SCHEMES_TABLE).insert(rows).execute()
        except Exception as e:
            raise PersistenceError("seed schemes", str(e))

        inserted = len(response.data or [])
        logger.info(f"Seeded {inserted} default schemes")
        return inserted
