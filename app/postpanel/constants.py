"""
Central constants for the post panel.
"""
from __future__ import annotations

# Rows per list page (posts and categories)
POSTS_PER_PAGE = 10
CATEGORIES_PER_PAGE = 10

# Column width shared by posts.name and categories.name
NAME_MAX_LENGTH = 255

# Methods a POST form may tunnel through `_method`
OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})

# Largest value a BIGINT / SQLite INTEGER column can hold
MAX_DB_INT = 2**63 - 1
