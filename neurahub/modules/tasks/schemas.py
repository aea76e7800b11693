from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    DONE = "Done"


TEAM_ASSIGNEE = "Team"
DEFAULT_TASK_DESCRIPTION = "Task assigned to the team."


class Attachment(BaseModel):
    id: str
    name: str
    type: str
    url: str
    size: Optional[str] = None


class TaskCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    role: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    deadline: Optional[str] = None
    attachments: List[Attachment] = []


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    role: Optional[str] = None
    status: Optional[TaskStatus] = None
    deadline: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class TaskMove(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    id: str
    team_id: str
    title: str
    description: Optional[str] = ""
    assigned_to: Optional[str] = TEAM_ASSIGNEE
    role: Optional[str] = ""
    status: TaskStatus
    deadline: Optional[str] = None
    attachments: List[Attachment] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskBoardColumn(BaseModel):
    status: TaskStatus
    tasks: List[TaskResponse]


class RoleCompletion(BaseModel):
    role: str
    completed: int


class TaskAnalytics(BaseModel):
    total: int
    by_status: Dict[str, int]
    completed_by_role: List[RoleCompletion]
