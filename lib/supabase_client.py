# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the single Supabase client used by the portal:
# - lazy construction from Settings (singleton per process)
# - a cheap connectivity probe for health checks
# - the startup connectivity check with retry
#
# Table access itself lives in the core/services stores, which receive the
# client through dependency injection.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client(settings)
# =============================================================================

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from supabase import create_client, Client

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# Cheapest table read that proves the schema is reachable
PING_TABLE = "schemes"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed and how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Process-wide holder for the Supabase client.

    One client instance is shared across the application. All methods are
    class methods so callers never instantiate the wrapper.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls, settings: Settings) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key which bypasses Row Level Security (RLS);
        access control is enforced by the API layer instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used on shutdown and by tests)."""
        cls._instance = None

    @staticmethod
    def ping(client: Client) -> None:
        """
        Run a one-row read to prove the store answers.

        Raises:
            SupabaseClientError: If the query fails
        """
        try:
            client.table(PING_TABLE).select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
                suggestion="Check that the project is running and migrations have been applied",
            )

    @classmethod
    def connect_with_retry(
        cls,
        settings: Settings,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Client:
        """
        Build the client and verify connectivity, retrying a fixed number of times.

        Args:
            settings: Application settings (retry count and delay)
            sleep: Pause function, replaceable in tests

        Returns:
            Client: A client that answered a ping

        Raises:
            SupabaseClientError: After the last failed attempt
        """
        attempts = settings.DB_CONNECT_RETRIES
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            logger.info(f"Connecting to database (attempt {attempt}/{attempts})")
            try:
                client = cls.get_client(settings)
                cls.ping(client)
                logger.info("Database connection verified")
                return client
            except SupabaseClientError as e:
                last_error = e
                logger.error(f"Database connection attempt {attempt} failed: {e.message}")
                # Rebuild the client on the next attempt
                cls.reset()
                if attempt < attempts:
                    sleep(settings.DB_CONNECT_RETRY_DELAY_SECONDS)

        raise SupabaseClientError(
            message=f"Could not connect to the database after {attempts} attempts: {last_error}",
            code="CONNECT_FAILED",
            suggestion="Check that the Supabase project is running, the URL and key are correct, "
                       "and the network allows outbound HTTPS",
        )
