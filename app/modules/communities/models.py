# Supabase tables: communities, community_tags, community_members, chat_rooms
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

communities:
- id: bigint (primary key, identity)
- name: text (not null)
- description: text (nullable)
- image_url: text (nullable) - public URL in the community-images bucket
- country: text (nullable)
- city: text (nullable)
- is_private: boolean (default: false)
- member_count: integer (default: 0)
- created_by: bigint (foreign key to users.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

community_tags:
- id: bigint (primary key)
- community_id: bigint (foreign key to communities.id, not null)
- tag_id: bigint (foreign key to tags.id, not null)
- unique constraint on (community_id, tag_id)

community_members:
- id: bigint (primary key)
- community_id: bigint (foreign key to communities.id, not null)
- user_id: bigint (foreign key to users.id, not null)
- role: text (not null, default: 'member') - values: owner, member
- status: text (not null, default: 'active') - values: active, pending
- joined_at: timestamp (default: now())
- unique constraint on (community_id, user_id)

chat_rooms:
- id: bigint (primary key)
- community_id: bigint (foreign key to communities.id, not null)
- event_id: bigint (foreign key to events.id, nullable) - set for event chats
- name: text (not null)
- type: text (not null) - values: text, voice, video
- is_moderator_only: boolean (default: false)
- created_at: timestamp (default: now())
"""
