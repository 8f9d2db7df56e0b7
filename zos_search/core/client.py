"""
z/OSMF REST files client
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import aiohttp
from .config import ZosmfConfig
from .errors import ZosFilesError, ZosmfRestError, process_error
from ..utils.helpers import exclude_datasets


RESTFILES_DS = "/zosmf/restfiles/ds"

CSRF_HEADER = {"X-CSRF-ZOSMF-HEADER": "true"}


class ZosmfClient:
    """
    Thin async wrapper over the z/OSMF data set REST services

    Use as an async context manager so that every request made during a
    search shares one connection pool:

        async with ZosmfClient(config) as client:
            items = await client.list_data_sets_matching(["IBMUSER.*"])
    """

    def __init__(self, config: ZosmfConfig):
        self.config = config
        self.logger = logging.getLogger("ZosmfClient")
        self.session: Optional[aiohttp.ClientSession] = None

    async def open(self):
        """Create the HTTP session"""
        if self.session is not None:
            return

        auth = None
        if self.config.user:
            auth = aiohttp.BasicAuth(self.config.user, self.config.password or "")

        self.session = aiohttp.ClientSession(
            auth=auth,
            headers=CSRF_HEADER,
            connector=aiohttp.TCPConnector(ssl=self.config.reject_unauthorized),
            timeout=aiohttp.ClientTimeout(total=self.config.request_timeout)
        )
        self.logger.debug(f"Opened session to {self.config.base_url}")

    async def close(self):
        """Close the HTTP session"""
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "ZosmfClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _get(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> bytes:
        """
        Issue a GET request and return the raw response body

        Raises:
            ZosmfRestError: on a non-2xx status or when z/OSMF cannot be reached
        """
        if self.session is None:
            raise ZosFilesError("ZosmfClient is not open; use 'async with ZosmfClient(config)'")

        url = f"{self.config.base_url}{path}"
        self.logger.debug(f"GET {url} params={params}")

        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                body = await response.read()
                if response.status >= 400:
                    raise process_error(ZosmfRestError(
                        f"Rest API failure with HTTP(S) status {response.status}",
                        status=response.status,
                        cause_errors=body.decode("utf-8", errors="replace"),
                        additional_details=(
                            f"Received HTTP(S) error {response.status} = {response.reason}.\n\n"
                            f"Host:      {self.config.host}\n"
                            f"Port:      {self.config.port}\n"
                            f"Resource:  {path}"
                        )
                    ))
                return body

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ZosmfRestError(
                f"Failed to reach z/OSMF at {self.config.base_url}: {str(e) or type(e).__name__}",
                cause_errors=e
            ) from e

    async def _get_json(self, path: str, params=None, headers=None) -> Dict[str, Any]:
        body = await self._get(path, params, headers)
        if not body:
            return {}
        try:
            return json.loads(body)
        except ValueError as e:
            raise ZosmfRestError(f"Invalid JSON returned for {path}", cause_errors=e) from e

    async def list_data_sets_matching(
        self,
        patterns: List[str],
        options: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        List data sets matching one or more patterns

        Args:
            patterns: Data set name patterns, e.g. ``IBMUSER.**``
            options: ``exclude_patterns`` drops matching names from the result

        Returns:
            Data set list entries with at least ``dsname``, ``dsorg`` and ``migr``
        """
        options = options or {}
        headers = {"X-IBM-Attributes": "base", "X-IBM-Max-Items": "0"}

        entries: List[Dict[str, Any]] = []
        seen = set()

        for pattern in patterns:
            data = await self._get_json(RESTFILES_DS, params={"dslevel": pattern}, headers=headers)
            for entry in data.get("items", []):
                dsname = entry.get("dsname")
                if dsname and dsname not in seen:
                    seen.add(dsname)
                    entries.append(entry)

        entries = exclude_datasets(entries, options.get("exclude_patterns", []))
        self.logger.info(f"Listed {len(entries)} data sets matching {', '.join(patterns)}")
        return entries

    async def list_all_members(self, dsn: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        List the members of a partitioned data set

        Args:
            dsn: Partitioned data set name
            options: ``pattern`` restricts the listing to matching member names

        Returns:
            The z/OSMF response, whose ``items`` hold ``{"member": ...}`` entries
        """
        options = options or {}
        params = {"pattern": options["pattern"]} if options.get("pattern") else None

        return await self._get_json(
            f"{RESTFILES_DS}/{quote(dsn)}/member",
            params=params,
            headers={"X-IBM-Max-Items": "0"}
        )

    async def get_data_set(self, target: str, options: Optional[Dict[str, Any]] = None) -> bytes:
        """
        Download the content of a data set or member

        Args:
            target: ``DSN`` or ``DSN(MEMBER)``
            options: ``binary``, ``encoding``, ``volume`` and ``query_params``
                (extra query string parameters such as a server-side search)

        Returns:
            Response body bytes; empty when a server-side search found nothing
        """
        options = options or {}

        if options.get("binary"):
            data_type = "binary"
        elif options.get("encoding"):
            data_type = f"text;fileEncoding={options['encoding']}"
        else:
            data_type = "text"

        path = RESTFILES_DS + "/"
        if options.get("volume"):
            path += f"-({quote(options['volume'])})/"
        path += quote(target, safe="()")

        return await self._get(
            path,
            params=options.get("query_params"),
            headers={"X-IBM-Data-Type": data_type}
        )
