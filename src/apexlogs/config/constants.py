"""Configuration constants.

Values here are API constraints and naming conventions that should NOT be
user-configurable. For configurable values, see models.py.
"""

# =============================================================================
# Catalog query limits
# =============================================================================
# The tooling API rejects larger pages; configured defaults are clamped into
# this range before every query.

LIMIT_MIN = 1
LIMIT_MAX = 200
LIMIT_DEFAULT = 100
"""Default number of logs requested per catalog query."""

# =============================================================================
# Export
# =============================================================================

CONCURRENCY_DEFAULT = 5
"""Default number of body downloads in flight."""

OUTPUT_DIR_DEFAULT = "apexlogs"
"""Default artifact directory, relative to the working directory."""

OWNER_FALLBACK = "default"
"""Owner segment used when the log user is blank."""

ARTIFACT_SUFFIX = ".log"

# =============================================================================
# Persisted state
# =============================================================================

PREFETCH_LOG_BODIES_KEY = "apexLogs.prefetchLogBodies"
"""Key of the prefetch toggle in the durable state store."""

PROJECT_FILE = "sfdx-project.json"
