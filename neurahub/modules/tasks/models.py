# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tasks:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- title: text (not null)
- description: text (nullable)
- assigned_to: text (nullable) - member id, or 'Team' for the whole team
- role: text (nullable)
- status: text (default: 'To Do') - 'To Do', 'In Progress', 'Review', 'Done'
- deadline: date (nullable) - YYYY-MM-DD
- attachments: jsonb (default: []) - list of {id, name, type, url, size}
- created_by: uuid (nullable, foreign key to users.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
