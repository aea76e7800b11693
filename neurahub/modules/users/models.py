# Supabase tables: users, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, same value as auth.users.id)
- username: text (not null)
- email: text (not null)
- avatar: text (nullable) - generated avatar URL when not set
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Note: this is the application's shadow copy of the auth user. It is
created or refreshed on registration, login, team creation, joining a team
and invitation acceptance so that members can be joined to a display name.
"""
