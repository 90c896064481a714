"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of PostgREST errors into
application exceptions.
"""

import logging
from typing import TypeVar, Generic, Any

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ExternalServiceError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres error codes surfaced through PostgREST
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
INVALID_TEXT_REPRESENTATION = "22P02"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() to run a query and translate provider errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class TodoRepository(BaseRepository[Todo]):
            def get_by_id(self, todo_id: str) -> Optional[Todo]:
                result = self._execute(
                    self._db.table("todos").select("*").eq("id", todo_id)
                )
                if not result.data:
                    return None
                return self._map_to_todo(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(
        self,
        query: Any,
        not_found_on_bad_id: bool = False,
        reraise: tuple[str, ...] = (UNIQUE_VIOLATION,),
    ) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            query: The query builder to execute.
            not_found_on_bad_id: When True, a malformed UUID in a filter
                (Postgres 22P02) yields None instead of an error, so lookups
                by a garbage id behave like lookups of a missing row.
            reraise: Postgres error codes handed back to the caller as the
                raw APIError, to be mapped to a domain error there.

        Returns:
            The PostgREST response, or None (see not_found_on_bad_id).

        Raises:
            APIError: For codes listed in reraise (unique violations by default).
            ExternalServiceError: For any other provider failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code in reraise:
                raise
            if not_found_on_bad_id and e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise self._provider_error(e) from e

    def _provider_error(self, error: APIError) -> ExternalServiceError:
        """Log a PostgREST failure and wrap it; clients only see a generic 500."""
        logger.warning("Supabase query failed: code=%s message=%s", error.code, error.message)
        return ExternalServiceError(
            "Database request failed",
            service="supabase",
            details={"code": error.code},
        )
