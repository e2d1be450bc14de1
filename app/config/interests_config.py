"""
Default interests offered during onboarding and used as discovery categories.
Used by the seed script to populate the tags table.
"""

DEFAULT_INTERESTS = [
    "Technology",
    "Travel",
    "Food & Cooking",
    "Fitness",
    "Art & Design",
    "Music",
    "Books",
    "Nature",
]
