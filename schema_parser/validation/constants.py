# Path: schema_parser/validation/constants.py
"""
Validation Module Constants

Messages reported by the structural quick check.
"""

# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

MSG_EMPTY_CONTENT = "YAML content is empty"

# ==============================================================================
# WARNING MESSAGES
# ==============================================================================

MSG_TABS = "Line {line} contains tabs - use spaces for YAML indentation"
MSG_LARGE_INDENT = "Large indentation detected ({gcd} spaces) - consider using 2 or 4 spaces"
MSG_INCONSISTENT_INDENT = (
    "Inconsistent indentation detected - use consistent spacing (2 or 4 spaces)"
)
MSG_CONTROL_CHARACTERS = "YAML contains control characters that may cause parsing issues"
MSG_NO_SECTIONS = "No main sections found in YAML"

# Lines starting with this (after indentation) are comments
COMMENT_PREFIX = "#"
