# Supabase table: teams
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

teams:
- id: uuid (primary key)
- name: text (not null)
- number: text (not null) - competition team number, expected unique
- city: text (nullable)
- motto: text (nullable)
- invite_code: text (not null) - 6 upper-case alphanumeric characters
- captain_email: text (not null) - expected unique
- status: text (default: 'active')
- progress: integer (default: 0)
- roles: text[] (default: Captain, Engineer, Coder, CADer, Mentor, Inspire, Scout)
- created_at: timestamp (default: now())

Uniqueness of number and captain_email is checked by the service before
insert; the table may or may not carry matching unique constraints.
"""
