from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from .filters import FilterableTask, TaskFilters, apply_filters, available_categories

TaskT = TypeVar("TaskT", bound=FilterableTask)


@dataclass(frozen=True)
class DashboardView(Generic[TaskT]):
    active: List[TaskT]
    completed: List[TaskT]
    completed_count: int
    total_count: int
    completion_percentage: int
    categories: List[str]
    filters: TaskFilters

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def has_matches(self) -> bool:
        return bool(self.active or self.completed)


def completion_percentage(tasks: Sequence[FilterableTask]) -> int:
    if not tasks:
        return 0
    done = sum(1 for task in tasks if task.completed)
    # Half rounds up (12.5 -> 13), unlike round()
    return int(done * 100 / len(tasks) + 0.5)


def build_dashboard(tasks: Sequence[TaskT], filters: TaskFilters) -> DashboardView[TaskT]:
    """Split the filtered tasks into active and completed sections.

    Progress and header counts are computed over the unfiltered list, so
    narrowing the view never changes the reported completion rate.
    """
    visible = apply_filters(tasks, filters)
    return DashboardView(
        active=[task for task in visible if not task.completed],
        completed=[task for task in visible if task.completed],
        completed_count=sum(1 for task in tasks if task.completed),
        total_count=len(tasks),
        completion_percentage=completion_percentage(tasks),
        categories=available_categories(tasks),
        filters=filters,
    )


def user_initials(username: str) -> str:
    if not username:
        return "??"
    return username[:2].upper()
