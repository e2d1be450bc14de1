# Supabase Auth
# Sign-up, sign-in and session management happen in the hosted identity
# provider; this backend only validates bearer tokens and writes per-user
# app_metadata.

"""
Identity provider user (auth.users), as seen by this backend:
- id: uuid - referenced by users.auth_user_id
- email: text
- user_metadata: editable by the user (unused here)
- app_metadata: server-side only, holds onboarding state:
    - onboarding_step: 'bio-completed' | 'location-completed'
    - onboarding_bio_complete: bool
    - onboarding_complete: bool
    - bio: text
    - interests: list of tag ids
    - location: {city, country}
"""
