# Supabase tables: tags
# Tags double as onboarding interests and discovery categories

"""
Expected Supabase table structure:

tags:
- id: bigint (primary key, identity)
- name: text (unique, not null)
"""
