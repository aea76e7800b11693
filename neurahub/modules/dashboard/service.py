from supabase import Client
from neurahub.modules.dashboard.schemas import DashboardSummary
from neurahub.modules.tasks.schemas import TaskStatus, TEAM_ASSIGNEE
from neurahub.modules.tasks.service import TaskService
from neurahub.modules.activities.service import ActivityService
from neurahub.modules.invitations.service import InvitationService
from neurahub.modules.members.service import MemberService
from neurahub.core.dependencies import get_membership

RECENT_ACTIVITY_COUNT = 10


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_summary(self, user_data: dict) -> DashboardSummary:
        """
        Home screen for the current user.

        "My" tasks are open tasks assigned to the user (by user id or member id)
        or to the whole team; every other open task is listed as a team task.
        Users without a team only see their pending invitations.
        """
        invitations = InvitationService(self.supabase).list_pending_for_email(user_data.get("email") or "")

        membership_result = self.supabase.table("members")\
            .select("team_id")\
            .eq("user_id", user_data["id"])\
            .limit(1)\
            .execute()
        if not membership_result.data:
            return DashboardSummary(invitations=invitations)

        team_id = membership_result.data[0]["team_id"]
        membership = get_membership(team_id, user_data["id"], self.supabase) or {}
        me = {user_data["id"], membership.get("id")}

        tasks = TaskService(self.supabase).list_tasks(team_id)
        open_tasks = [t for t in tasks if t.status != TaskStatus.DONE]
        mine = [t for t in open_tasks if t.assigned_to in me or t.assigned_to == TEAM_ASSIGNEE]
        mine_ids = {t.id for t in mine}
        others = [t for t in open_tasks if t.id not in mine_ids]

        by_status = {status.value: 0 for status in TaskStatus}
        for task in tasks:
            by_status[task.status.value] += 1

        return DashboardSummary(
            team_id=team_id,
            role=membership.get("role") or "Guest",
            member_count=len(MemberService(self.supabase).list_members(team_id)),
            my_tasks=mine,
            team_tasks=others,
            tasks_by_status=by_status,
            invitations=invitations,
            activities=ActivityService(self.supabase).list_activities(team_id, RECENT_ACTIVITY_COUNT),
        )
