# Supabase table: calendar_events
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

calendar_events:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- title: text (not null)
- date: date (not null) - YYYY-MM-DD
- location: text (nullable)
- priority: text (default: 'medium')
- created_by: uuid (nullable, foreign key to users.id)
- created_at: timestamp (default: now())
"""
