"""
Default values used when converting Redmine responses to models.
"""

EMPTY_STRING = ""
UNKNOWN = "Unknown"

REDMINE_DEFAULT_ID = 0

# Redmine caps page sizes at 100
MAX_SEARCH_LIMIT = 100
