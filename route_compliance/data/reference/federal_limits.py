"""
Federal Legal Limits

Standard legal envelope on the National Network. Loads inside it need no
OS/OW permit in any state; used for the quick permit check.
"""

MAX_WIDTH_FT = 8.5
MAX_HEIGHT_FT = 13.5
MAX_LENGTH_FT = 65.0
MAX_GROSS_WEIGHT_LBS = 80000
