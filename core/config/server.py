"""Server configuration constants."""

# Default HTTP port (overridden by the PORT environment variable)
DEFAULT_API_PORT = 3000

# Largest accepted request body, matches a generous drawing upload
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024

# How repeated drawing ids are handled: "append" keeps every record,
# "reject" refuses the second submission
DUPLICATE_ID_POLICIES = ("append", "reject")
DEFAULT_DUPLICATE_ID_POLICY = "append"
