"""
Data types shared by the data set search passes
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from zos_search.utils.helpers import format_target


class TaskStage(Enum):
    """Stages reported through a ProgressTask"""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class ProgressTask:
    """
    Mutable progress sink updated while a search runs

    Callers that render progress (a CLI progress bar, a log line) read the
    three attributes; the engine only ever writes them.
    """

    def __init__(self):
        self.stage_name = TaskStage.NOT_STARTED
        self.percent_complete = 0
        self.status_message = ""

    def update(self, stage_name: TaskStage, percent_complete: int, status_message: str):
        self.stage_name = stage_name
        self.percent_complete = percent_complete
        self.status_message = status_message


@dataclass(frozen=True)
class MatchLocation:
    """One occurrence of the search string"""
    line: int
    column: int
    contents: str


@dataclass
class SearchItem:
    """A data set, or a member of a partitioned data set, to be searched"""
    dsn: str
    member: Optional[str] = None
    match_list: Optional[List[MatchLocation]] = field(default=None, compare=False)

    @property
    def target(self) -> str:
        """Name used to address the item on z/OSMF, e.g. ``A.B(MEM)``"""
        return format_target(self.dsn, self.member)


class SearchOptions(BaseModel):
    """Options for a single data set search"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pattern: str = Field(min_length=1)
    search_string: str = Field(min_length=1)
    case_sensitive: bool = False
    max_concurrent_requests: Optional[int] = Field(default=1, ge=0)
    timeout: Optional[float] = None  # seconds
    mainframe_search: bool = False
    progress_task: Optional[ProgressTask] = None
    list_options: Dict[str, Any] = Field(default_factory=dict)
    get_options: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class SearchResponse:
    """Outcome of a data set search"""
    success: bool
    command_response: str
    api_response: List[SearchItem] = field(default_factory=list)
    error_message: Optional[str] = None
