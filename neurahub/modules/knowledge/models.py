# Supabase tables: kb_folders, kb_files
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

kb_folders:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- name: text (not null)
- color: text (default: 'text-pink-400') - display color class
- created_at: timestamp (default: now())

kb_files:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id)
- folder_id: uuid (foreign key to kb_folders.id)
- name: text (not null)
- type: text (default: 'application/octet-stream')
- url: text (not null)
- size: text (nullable) - human readable, e.g. '1.25 MB'
- uploaded_by: uuid (nullable, foreign key to users.id)
- created_at: timestamp (default: now())
"""
