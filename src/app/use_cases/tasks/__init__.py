"""Task use cases"""
from .create_task import CreateTask
from .update_task import UpdateTask
from .delete_task import DeleteTask
from .list_tasks import ListTasks, GetUnbilledTasksByClient, GetRecentTasks
from .get_dashboard_stats import GetDashboardStats
from .dtos import (
    CreateTaskCommandDTO,
    UpdateTaskCommandDTO,
    ListTasksQueryDTO,
    TaskResponseDTO,
    ListTasksResponseDTO,
    DashboardStatsDTO,
)

__all__ = [
    "CreateTask",
    "UpdateTask",
    "DeleteTask",
    "ListTasks",
    "GetUnbilledTasksByClient",
    "GetRecentTasks",
    "GetDashboardStats",
    "CreateTaskCommandDTO",
    "UpdateTaskCommandDTO",
    "ListTasksQueryDTO",
    "TaskResponseDTO",
    "ListTasksResponseDTO",
    "DashboardStatsDTO",
]
