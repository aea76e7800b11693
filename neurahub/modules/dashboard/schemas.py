from pydantic import BaseModel
from typing import Dict, List, Optional
from neurahub.modules.tasks.schemas import TaskResponse
from neurahub.modules.activities.schemas import ActivityResponse
from neurahub.modules.invitations.schemas import InvitationResponse


class DashboardSummary(BaseModel):
    team_id: Optional[str] = None
    role: str = "Guest"
    member_count: int = 0
    my_tasks: List[TaskResponse] = []
    team_tasks: List[TaskResponse] = []
    tasks_by_status: Dict[str, int] = {}
    invitations: List[InvitationResponse] = []
    activities: List[ActivityResponse] = []
