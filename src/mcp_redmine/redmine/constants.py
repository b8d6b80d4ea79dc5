"""Constants for Redmine REST API interactions."""

# Seconds before a request is abandoned
DEFAULT_TIMEOUT = 30.0

API_KEY_HEADER = "X-Redmine-API-Key"

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

# Related data returned by read_issue unless the caller asks otherwise
DEFAULT_ISSUE_INCLUDES = ["attachments", "journals"]

