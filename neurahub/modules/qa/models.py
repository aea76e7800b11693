# Supabase tables: questions, answers
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

questions:
- id: uuid (primary key)
- title: text (not null)
- body: text (not null)
- author_id: uuid (foreign key to users.id)
- created_at: timestamp (default: now())

answers:
- id: uuid (primary key)
- question_id: uuid (foreign key to questions.id, on delete cascade)
- body: text (not null)
- author_id: uuid (foreign key to users.id)
- created_at: timestamp (default: now())

Author usernames are resolved from users.username at read time.
"""
