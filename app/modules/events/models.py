# Supabase tables: events, event_attendees
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

events:
- id: bigint (primary key, identity)
- community_id: bigint (foreign key to communities.id, not null)
- title: text (not null)
- description: text (nullable)
- start_time: timestamptz (not null)
- end_time: timestamptz (nullable)
- address: text (nullable)
- city: text (nullable)
- country: text (nullable)
- is_online: boolean (default: false)
- max_attendees: integer (nullable) - null means unlimited
- created_by: bigint (foreign key to users.id)
- created_at: timestamp (default: now())

event_attendees:
- id: bigint (primary key)
- event_id: bigint (foreign key to events.id, not null)
- user_id: bigint (foreign key to users.id, not null)
- rsvp_status: text (not null) - values: going, interested, not_going
- rsvp_time: timestamp (default: now())
- unique constraint on (event_id, user_id)

Each event also gets a row in chat_rooms (event_id set), see communities/models.py.
"""
