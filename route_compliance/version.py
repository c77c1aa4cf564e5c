"""
Engine Version

Stamped on every analysis so stored reports can be traced back to the rule
set that produced them. Bump when reference data or evaluation logic changes.
"""

VERSION = "2025.2.1"
