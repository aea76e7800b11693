from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.tasks.schemas import (
    TaskCreate, TaskUpdate, TaskMove, TaskResponse, TaskBoardColumn, TaskAnalytics
)
from neurahub.modules.tasks.service import TaskService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, get_access_cache, display_name
)
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/teams/{team_id}/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    team_id: str,
    role: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """List team tasks. Use role=... to see one role's tasks."""
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_tasks(team_id, role)


@router.get("/board", response_model=List[TaskBoardColumn])
async def get_board(
    team_id: str,
    role: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.board(team_id, role)


@router.get("/analytics", response_model=TaskAnalytics)
async def get_analytics(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Completed tasks per role"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.analytics(team_id)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    team_id: str,
    task_data: TaskCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Create a task (any team member)"""
    check_team_member(team_id, user_data, supabase, cache)
    task = service.create_task(team_id, task_data, user_data["id"])
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "created task", task.title, ActivityType.TASK, user_data["id"]
    )
    return task


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    team_id: str,
    task_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.get_task(team_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    team_id: str,
    task_id: str,
    task_data: TaskUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    task = service.update_task(team_id, task_id, task_data)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "updated task", task.title, ActivityType.TASK, user_data["id"]
    )
    return task


@router.post("/{task_id}/move", response_model=TaskResponse)
async def move_task(
    team_id: str,
    task_id: str,
    body: TaskMove,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Move a task to another board column"""
    check_team_member(team_id, user_data, supabase, cache)
    task = service.move_task(team_id, task_id, body.status)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), f"moved {task.title} to", body.status.value.upper(),
        ActivityType.TASK, user_data["id"]
    )
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    team_id: str,
    task_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    task = service.get_task(team_id, task_id)
    service.delete_task(team_id, task_id)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "deleted task", task.title, ActivityType.TASK, user_data["id"]
    )
    return None
