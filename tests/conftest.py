"""
Shared fixtures for the search tests
"""
import asyncio
import pytest


class FakeFilesClient:
    """
    In-memory stand-in for ZosmfClient

    Args:
        datasets: Data set list entries returned for any pattern
        members: PDS name -> member names, or an exception to raise
        contents: Target -> text, or an exception to raise
        delay: Seconds every call sleeps before answering
        list_error: Exception raised by list_data_sets_matching
    """

    def __init__(self, datasets=None, members=None, contents=None, delay=0, list_error=None):
        self.datasets = datasets or []
        self.members = members or {}
        self.contents = contents or {}
        self.delay = delay
        self.list_error = list_error
        self.get_calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_data_sets_matching(self, patterns, options=None):
        await asyncio.sleep(self.delay)
        if self.list_error:
            raise self.list_error
        return list(self.datasets)

    async def list_all_members(self, dsn, options=None):
        await asyncio.sleep(self.delay)
        members = self.members.get(dsn, [])
        if isinstance(members, Exception):
            raise members
        return {"items": [{"member": name} for name in members]}

    async def get_data_set(self, target, options=None):
        options = options or {}
        self.get_calls.append((target, options))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

        content = self.contents.get(target, "")
        if isinstance(content, Exception):
            raise content

        query = options.get("query_params")
        if query:
            needle = query["search"]
            insensitive = query.get("insensitive") != "false"
            hits = [
                line for line in content.splitlines()
                if (needle.lower() in line.lower() if insensitive else needle in line)
            ]
            return "\n".join(hits[:int(query["maxreturnsize"])]).encode()

        return content.encode()


@pytest.fixture
def files_client():
    """Factory for FakeFilesClient instances"""
    return FakeFilesClient
