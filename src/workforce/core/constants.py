"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 254
MAX_NAME_LENGTH = 255
MAX_CREATED_BY_LENGTH = 255
MAX_TENANT_NAME_LENGTH = 255

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Initializer section names
EMPLOYEES_INITIALIZER_NAME = "Employees"

# Seed rows are attributed to this creator
SEED_CREATED_BY = "System"
