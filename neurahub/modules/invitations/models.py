# Supabase table: invitations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

invitations:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- inviter_id: uuid (nullable, foreign key to users.id)
- inviter_name: text (nullable)
- user_email: text (not null) - stored lower-cased
- user_name: text (nullable)
- role: text (not null) - one of the team's roles
- status: text (default: 'pending') - 'pending', 'accepted', 'declined'
- created_at: timestamp (default: now())

At most one pending invitation exists per (team_id, user_email).
"""
