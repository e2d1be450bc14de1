# Supabase tables: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth; users.auth_user_id links the two

"""
Expected Supabase table structure:

users:
- id: bigint (primary key, identity)
- auth_user_id: text (unique, not null) - identity provider user id
- name: text (nullable)
- image_url: text (nullable)
- bio: text (nullable)
- city: text (nullable)
- country: text (nullable)
- location_latitude: double precision (nullable)
- location_longitude: double precision (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
