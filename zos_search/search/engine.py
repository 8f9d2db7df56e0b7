"""
Search engine that finds a string across many data sets and PDS members
"""
import logging
from typing import Any, List, Tuple
from zos_search.core.errors import ZosFilesError
from zos_search.search.deadline import Deadline
from zos_search.search.models import SearchItem, SearchOptions, SearchResponse, TaskStage
from zos_search.search.patterns import PatternMatcher
from zos_search.search.pool import async_pool
from zos_search.utils.helpers import is_migrated, is_partitioned, is_sequential


class DataSetSearch:
    """
    Searches the data sets matching a pattern for a string

    The client must provide ``list_data_sets_matching``, ``list_all_members``
    and ``get_data_set`` coroutines (see ZosmfClient). Each call to search()
    owns its own Deadline and accumulators, so one instance can run several
    searches concurrently.
    """

    def __init__(self, client: Any):
        self.client = client
        self.logger = logging.getLogger("DataSetSearch")

    async def search(self, options: SearchOptions) -> SearchResponse:
        """
        Perform a search

        Args:
            options: Pattern, search string and tuning options

        Returns:
            SearchResponse with the matched items sorted by data set and member

        Raises:
            ZosFilesError: if the data sets matching the pattern cannot be listed
        """
        deadline = Deadline(options.timeout)
        failures: List[str] = []
        progress = options.progress_task

        if progress:
            progress.update(TaskStage.IN_PROGRESS, 0, "Getting search list...")

        self.logger.info(f"Searching data sets matching '{options.pattern}' for '{options.search_string}'")

        deadline.start()
        try:
            search_items = await self.get_search_items(options, failures)

            if options.mainframe_search:
                search_items, mainframe_failures = await self.search_on_mainframe(options, search_items, deadline)
                failures.extend(mainframe_failures)

            matched_items, local_failures = await self.search_local(options, search_items, deadline)
            failures.extend(local_failures)
        finally:
            deadline.cancel()

        if progress:
            if deadline.expired:
                progress.update(TaskStage.FAILED, 100, "Operation timed out")
            else:
                progress.update(TaskStage.COMPLETE, 100, "Search complete")

        return self.build_response(options, matched_items, failures)

    async def get_search_items(self, options: SearchOptions, failures: List[str]) -> List[SearchItem]:
        """
        List the sequential data sets and PDS members to search

        Partitioned data sets whose members cannot be listed are added to
        failures; everything else is returned as a SearchItem.
        """
        list_options = {**options.list_options, "max_concurrent_requests": options.max_concurrent_requests}

        try:
            entries = await self.client.list_data_sets_matching([options.pattern], list_options)
        except Exception as e:
            self.logger.error(f"Failed to list data sets matching '{options.pattern}': {e}")
            raise ZosFilesError("Failed to get list of data sets to search", cause_errors=e) from e

        search_items: List[SearchItem] = []
        partitioned: List[str] = []

        for entry in entries:
            # Skip anything without an organization, or migrated
            if not entry.get("dsorg") or is_migrated(entry):
                continue
            if is_sequential(entry):
                search_items.append(SearchItem(dsn=entry["dsname"]))
            elif is_partitioned(entry):
                partitioned.append(entry["dsname"])

        for dsn in partitioned:
            try:
                response = await self.client.list_all_members(dsn, options.list_options)
            except Exception as e:
                self.logger.warning(f"Failed to list members of {dsn}: {e}")
                failures.append(dsn)
                continue

            for item in response.get("items", []):
                if item.get("member") is not None:
                    search_items.append(SearchItem(dsn=dsn, member=item["member"]))

        self.logger.info(f"Found {len(search_items)} data sets and members to search")
        return search_items

    async def search_on_mainframe(
        self,
        options: SearchOptions,
        search_items: List[SearchItem],
        deadline: Deadline
    ) -> Tuple[List[SearchItem], List[str]]:
        """
        Ask z/OSMF which items contain the search string

        Items for which the server returns nothing are dropped, so only
        likely matches are downloaded in full by search_local().

        Returns:
            (items that may match, targets that could not be checked)
        """
        matches: List[SearchItem] = []
        failures: List[str] = []
        total = len(search_items)
        complete = 0

        query_params = {"search": options.search_string, "maxreturnsize": "1"}
        if options.case_sensitive:
            query_params["insensitive"] = "false"

        async def check(search_item: SearchItem):
            nonlocal complete
            try:
                if deadline.expired:
                    failures.append(search_item.target)
                    return

                try:
                    content = await self.client.get_data_set(
                        search_item.target,
                        {**options.get_options, "query_params": query_params}
                    )
                except Exception as e:
                    self.logger.warning(f"Mainframe search of {search_item.target} failed: {e}")
                    failures.append(search_item.target)
                    return

                if content:
                    matches.append(search_item)
            finally:
                complete += 1
                if options.progress_task:
                    options.progress_task.update(
                        TaskStage.IN_PROGRESS,
                        complete * 50 // total,
                        f"Initial Mainframe Search: {complete} of {total} entries checked"
                    )

        await async_pool(options.max_concurrent_requests, search_items, check)

        self.logger.info(f"Mainframe search kept {len(matches)} of {total} entries")
        return matches, failures

    async def search_local(
        self,
        options: SearchOptions,
        search_items: List[SearchItem],
        deadline: Deadline
    ) -> Tuple[List[SearchItem], List[str]]:
        """
        Download each item and locate every occurrence of the search string

        Returns:
            (items with their match_list set, targets that could not be searched)
        """
        matcher = PatternMatcher(options.case_sensitive)
        matched_items: List[SearchItem] = []
        failures: List[str] = []
        total = len(search_items)
        complete = 0

        async def scan(search_item: SearchItem):
            nonlocal complete
            try:
                if deadline.expired:
                    failures.append(search_item.target)
                    return

                try:
                    content = await self.client.get_data_set(search_item.target, dict(options.get_options))
                except Exception as e:
                    self.logger.warning(f"Download of {search_item.target} failed: {e}")
                    failures.append(search_item.target)
                    return

                text = (content or b"").decode("utf-8", errors="replace")
                locations = matcher.find_match_locations(text, options.search_string)
                if locations:
                    search_item.match_list = locations
                    matched_items.append(search_item)
            finally:
                complete += 1
                if options.progress_task:
                    if options.mainframe_search:
                        percent = 50 + complete * 50 // total
                    else:
                        percent = complete * 100 // total
                    options.progress_task.update(
                        TaskStage.IN_PROGRESS,
                        percent,
                        f"Performing Deep Search: {complete} of {total} entries checked"
                    )

        await async_pool(options.max_concurrent_requests, search_items, scan)

        self.logger.info(f"Found matches in {len(matched_items)} of {total} entries")
        return matched_items, failures

    def build_response(
        self,
        options: SearchOptions,
        matched_items: List[SearchItem],
        failures: List[str]
    ) -> SearchResponse:
        """
        Sort the matches and render the report

        ``success`` is True when at least one target failed to be searched
        and False otherwise; callers rely on this exact behavior.
        """
        matched_items = sorted(matched_items, key=lambda item: (item.dsn, item.member or ""))
        search_string = PatternMatcher(options.case_sensitive).normalize(options.search_string)

        command_response = f'Found "{search_string}" in {len(matched_items)} data sets and PDS members'

        if matched_items:
            command_response += ":\n"
            for entry in matched_items:
                command_response += f'\nData Set "{entry.dsn}"'
                if entry.member:
                    command_response += f' | Member "{entry.member}":\n'
                else:
                    command_response += ":\n"
                for location in entry.match_list:
                    command_response += (
                        f"Line: {location.line}, Column: {location.column}, Contents: {location.contents}\n"
                    )
        else:
            command_response += "."

        error_message = None
        if failures:
            error_message = "The following data set(s) failed to be searched: \n"
            for entry in failures:
                error_message += entry + "\n"

        return SearchResponse(
            success=len(failures) > 0,
            command_response=command_response,
            api_response=matched_items,
            error_message=error_message
        )
