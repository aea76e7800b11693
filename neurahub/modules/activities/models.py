# Supabase table: team_activities
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

team_activities:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id, not null)
- user_id: uuid (nullable) - actor, references users.id
- user_name: text (not null) - actor display name at the time of the action
- action: text (not null) - e.g. "created task", "voted for"
- target: text (not null) - e.g. the task title
- activity_type: text (not null) - values: task, idea, member, file, event
- timestamp: bigint (not null) - milliseconds since epoch

The feed is append-only; readers only ever see the newest 50 rows.
"""
