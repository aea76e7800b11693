# Supabase table: members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

members:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- role: text (not null) - one of the team's roles, or 'Guest' after joining by code
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
- unique constraint on (team_id, user_id) is assumed but not relied upon
"""
