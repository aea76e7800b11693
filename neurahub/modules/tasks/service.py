from supabase import Client
from neurahub.modules.tasks.schemas import (
    TaskCreate, TaskUpdate, TaskResponse, TaskStatus, TaskBoardColumn,
    TaskAnalytics, RoleCompletion, TEAM_ASSIGNEE, DEFAULT_TASK_DESCRIPTION
)
from neurahub.modules.members.service import MemberService
from typing import List, Optional
from fastapi import HTTPException
from datetime import date, datetime, timedelta

DEFAULT_DEADLINE_DAYS = 7


def default_deadline(today: Optional[date] = None) -> str:
    return ((today or date.today()) + timedelta(days=DEFAULT_DEADLINE_DAYS)).isoformat()


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tasks(self, team_id: str, role: Optional[str] = None) -> List[TaskResponse]:
        """List team tasks, newest first, optionally only those for one role"""
        try:
            query = self.supabase.table("tasks")\
                .select("*")\
                .eq("team_id", team_id)
            if role:
                query = query.eq("role", role)
            result = query.order("created_at", desc=True).execute()
            return [TaskResponse(**row) for row in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_task(self, team_id: str, task_id: str) -> TaskResponse:
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("id", task_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")
            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def board(self, team_id: str, role: Optional[str] = None) -> List[TaskBoardColumn]:
        """Tasks grouped into the four status columns, in board order"""
        tasks = self.list_tasks(team_id, role)
        return [
            TaskBoardColumn(status=status, tasks=[t for t in tasks if t.status == status])
            for status in TaskStatus
        ]

    def create_task(self, team_id: str, task_data: TaskCreate, user_id: str) -> TaskResponse:
        """Create a task. Unassigned tasks go to the whole team with a week's deadline."""
        try:
            result = self.supabase.table("tasks").insert({
                "team_id": team_id,
                "title": task_data.title,
                "description": task_data.description or DEFAULT_TASK_DESCRIPTION,
                "assigned_to": task_data.assigned_to or TEAM_ASSIGNEE,
                "role": task_data.role or "",
                "status": task_data.status.value,
                "deadline": task_data.deadline or default_deadline(),
                "attachments": [a.model_dump() for a in task_data.attachments],
                "created_by": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create task")

            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_task(self, team_id: str, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        """Update task"""
        try:
            update_data = task_data.model_dump(exclude_none=True, mode="json")
            if not update_data:
                return self.get_task(team_id, task_id)
            update_data["updated_at"] = datetime.utcnow().isoformat()

            result = self.supabase.table("tasks")\
                .update(update_data)\
                .eq("id", task_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")

            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def move_task(self, team_id: str, task_id: str, status: TaskStatus) -> TaskResponse:
        return self.update_task(team_id, task_id, TaskUpdate(status=status))

    def delete_task(self, team_id: str, task_id: str) -> bool:
        """Delete task"""
        try:
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def analytics(self, team_id: str) -> TaskAnalytics:
        """Completed tasks per team role plus totals per status"""
        tasks = self.list_tasks(team_id)
        roles = MemberService(self.supabase).get_team_roles(team_id)
        by_status = {status.value: 0 for status in TaskStatus}
        for task in tasks:
            by_status[task.status.value] += 1
        return TaskAnalytics(
            total=len(tasks),
            by_status=by_status,
            completed_by_role=[
                RoleCompletion(
                    role=role,
                    completed=sum(1 for t in tasks if t.role == role and t.status == TaskStatus.DONE),
                )
                for role in roles
            ],
        )
