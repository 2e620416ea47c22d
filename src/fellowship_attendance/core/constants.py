"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MYSQL_DUPLICATE_ENTRY = 1062
QR_BOX_SIZE = 10
QR_BORDER = 2
SCAN_PATH = "/scan/"
