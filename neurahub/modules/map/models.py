# Supabase table: map_teams
# This file documents the expected database schema
# Filled from config/map_teams_config.py by scripts/seed_map_teams.py

"""
Expected Supabase table structure:

map_teams:
- id: text (primary key) - seed id, e.g. 'kz-1'
- number: text (not null)
- name: text (not null)
- location: text (not null)
- description: text (nullable)
- lat: double precision (not null)
- lng: double precision (not null)
- website: text (nullable)
- awards: text[] (default: [])
- logo: text (nullable)
"""
