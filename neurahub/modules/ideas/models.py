# Supabase table: ideas
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

ideas:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- author: text (not null) - display name of the author
- author_id: uuid (nullable, foreign key to users.id)
- title: text (not null)
- content: text (nullable)
- voted_by: text[] (default: []) - user ids that voted for the idea
- tags: text[] (default: ['Innovation'])
- created_at: timestamp (default: now())
"""
