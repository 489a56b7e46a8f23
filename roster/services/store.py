from typing import Dict, Any, Optional
import logging

import httpx

from .models import CallResult

logger = logging.getLogger(__name__)


class StudentStore:
    """Table-level CRUD against the Supabase PostgREST interface"""

    def __init__(self, client: httpx.AsyncClient, rest_url: str, api_key: str, table: str = "students"):
        """
        Bind the store to a shared HTTP client and one table.
        The anon key goes both in the apikey header and as the bearer token, as Supabase expects.

        """
        self.client = client
        self.table_url = f"{rest_url}/{table}"
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def select_all(self) -> CallResult:
        """Fetch every row of the table, no filter or ordering."""
        return await self._request("GET", params={"select": "*"})

    async def insert(self, row: Dict[str, Any]) -> CallResult:
        """Insert a single row and return the inserted representation."""
        return await self._request("POST", json=[row], returning=True)

    async def update(self, column: str, value: Any, changes: Dict[str, Any]) -> CallResult:
        """
        Apply changes to every row where column equals value.
        Zero matching rows is not an error, the store returns an empty list.

        """
        return await self._request(
            "PATCH", params={column: f"eq.{value}"}, json=changes, returning=True
        )

    async def delete(self, column: str, value: Any) -> CallResult:
        """Delete every row where column equals value."""
        return await self._request("DELETE", params={column: f"eq.{value}"}, returning=True)

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        returning: bool = False,
    ) -> CallResult:
        """
        Issue one request and fold both failure modes into a CallResult.
        Error statuses become EXTERNAL results carrying the PostgREST error body,
        anything raised on the way becomes an UNEXPECTED result.

        """
        headers = dict(self.headers)
        if returning:
            headers["Prefer"] = "return=representation"

        try:
            response = await self.client.request(
                method, self.table_url, params=params, json=json, headers=headers
            )
            logger.debug(f"{method} {self.table_url} -> {response.status_code}")
            if response.is_error:
                return CallResult.external(_error_body(response))
            return CallResult.success(response.json() if response.content else None)
        except Exception as e:
            return CallResult.unexpected(str(e))


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"status": response.status_code, "message": response.text}
