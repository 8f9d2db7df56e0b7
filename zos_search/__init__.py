"""
z/OS Data Set Search

Finds a string across the data sets and partitioned data set members that
match a name pattern, using the z/OSMF REST files services.
"""

__version__ = "0.1.0"

from .core.client import ZosmfClient
from .core.errors import ZosFilesError, ZosmfRestError
from .search.engine import DataSetSearch
from .search.models import SearchItem, MatchLocation, SearchOptions, SearchResponse, ProgressTask, TaskStage
from .search.patterns import PatternMatcher

__all__ = [
    "ZosmfClient",
    "ZosFilesError",
    "ZosmfRestError",
    "DataSetSearch",
    "SearchItem",
    "MatchLocation",
    "SearchOptions",
    "SearchResponse",
    "ProgressTask",
    "TaskStage",
    "PatternMatcher",
]
