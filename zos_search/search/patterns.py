"""
String matching used by the local scan of downloaded data sets
"""
import re
from typing import List
from zos_search.search.models import MatchLocation


LINE_BREAK = re.compile(r"\r?\n")


class PatternMatcher:
    """
    Plain substring matching over data set content
    """

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def normalize(self, text: str) -> str:
        """Fold case unless the search is case sensitive"""
        return text if self.case_sensitive else text.lower()

    def find_in_line(self, line: str, search_string: str) -> List[int]:
        """
        Find the columns where search_string occurs in an already normalized line

        After a match the search resumes at the end of that match, so
        overlapping occurrences are not reported: "aa" in "aaa" gives [0].

        Args:
            line: Normalized line text
            search_string: Normalized search string

        Returns:
            Zero-based columns of each occurrence
        """
        columns = []
        column = line.find(search_string)
        while column != -1:
            columns.append(column)
            column = line.find(search_string, column + len(search_string))
        return columns

    def find_match_locations(self, content: str, search_string: str) -> List[MatchLocation]:
        """
        Locate every occurrence of search_string in content

        Args:
            content: Full text of a data set or member
            search_string: String to look for

        Returns:
            Match locations with zero-based line and column numbers; the
            contents of each location is the line as it was downloaded
        """
        if not search_string:
            return []

        needle = self.normalize(search_string)
        locations = []

        for line_num, raw_line in enumerate(LINE_BREAK.split(content)):
            line = self.normalize(raw_line)
            if needle not in line:
                continue
            for column in self.find_in_line(line, needle):
                locations.append(MatchLocation(line=line_num, column=column, contents=raw_line))

        return locations


def find_match_locations(content: str, search_string: str, case_sensitive: bool = False) -> List[MatchLocation]:
    """Shortcut for PatternMatcher(case_sensitive).find_match_locations()"""
    return PatternMatcher(case_sensitive).find_match_locations(content, search_string)
