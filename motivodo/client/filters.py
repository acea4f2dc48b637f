"""Dashboard task filtering.

Filters combine with AND across dimensions and OR within one, so
``priority={"high", "low"}`` plus ``completed=active`` keeps unfinished
tasks that are either high or low priority. An empty dimension does not
constrain anything.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Protocol, Sequence, TypeVar


class CompletionMode(str, Enum):
    all = "all"
    active = "active"
    completed = "completed"


class FilterableTask(Protocol):
    title: str
    description: Optional[str]
    priority: object
    category: Optional[str]
    completed: bool


TaskT = TypeVar("TaskT", bound=FilterableTask)


def _value(item: object) -> str:
    return item.value if isinstance(item, Enum) else str(item)


@dataclass(frozen=True)
class TaskFilters:
    search: str = ""
    priority: FrozenSet[str] = field(default_factory=frozenset)
    category: FrozenSet[str] = field(default_factory=frozenset)
    completed: CompletionMode = CompletionMode.all

    def __post_init__(self) -> None:
        # Accept any iterable of strings or enum members
        object.__setattr__(self, "priority", frozenset(_value(p) for p in self.priority))
        object.__setattr__(self, "category", frozenset(self.category))
        object.__setattr__(self, "completed", CompletionMode(self.completed))

    @property
    def active_filter_count(self) -> int:
        return (
            (1 if self.search else 0)
            + len(self.priority)
            + len(self.category)
            + (1 if self.completed is not CompletionMode.all else 0)
        )

    @property
    def is_active(self) -> bool:
        return self.active_filter_count > 0

    def toggle_priority(self, priority) -> "TaskFilters":
        value = _value(priority)
        return replace(self, priority=self.priority ^ {value})

    def toggle_category(self, category: str) -> "TaskFilters":
        return replace(self, category=self.category ^ {category})

    def cleared(self) -> "TaskFilters":
        return TaskFilters()


def matches(task: FilterableTask, filters: TaskFilters) -> bool:
    if filters.search:
        needle = filters.search.lower()
        in_title = needle in task.title.lower()
        in_description = bool(task.description) and needle in task.description.lower()
        if not (in_title or in_description):
            return False

    if filters.priority:
        if not task.priority or _value(task.priority) not in filters.priority:
            return False

    if filters.category:
        if not task.category or task.category not in filters.category:
            return False

    if filters.completed is CompletionMode.active and task.completed:
        return False
    if filters.completed is CompletionMode.completed and not task.completed:
        return False

    return True


def apply_filters(tasks: Iterable[TaskT], filters: TaskFilters) -> List[TaskT]:
    """Return the tasks matching every active filter, keeping their order."""
    return [task for task in tasks if matches(task, filters)]


def available_categories(tasks: Sequence[FilterableTask]) -> List[str]:
    return sorted({task.category for task in tasks if task.category})
