"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_GEO_LOOKUP_URL = "https://ipapi.co"
DEFAULT_GEO_LOOKUP_TIMEOUT = 5.0
DEFAULT_DB_CONNECTION_TIMEOUT = 10

# Import header aliases, matched after lower-casing and trimming.
NAME_ALIASES = ("agent name", "agent", "name")
COMPANY_ALIASES = ("company",)
MANAGER_ALIASES = ("teams", "team")
LOCATION_ALIASES = ("location",)

IMPORT_TEMPLATE_HEADER = "Agent Name,Company,Teams,Location"
