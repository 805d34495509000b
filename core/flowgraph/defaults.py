"""
Flow Graph Module Default Values

Version: 1.0.0
"""

from .constants import (
    STEP_MODE_SEQUENTIAL,
    DEFAULT_WORKFLOWS_DIR,
    FILE_EXT_JSON,
)

# =============================================================================
# NODE DEFAULTS
# =============================================================================

DEFAULT_STEP_MODE = STEP_MODE_SEQUENTIAL
DEFAULT_START_LABEL = "Start"
DEFAULT_END_LABEL = "End"
DEFAULT_POSITION_X = 0.0
DEFAULT_POSITION_Y = 0.0

# =============================================================================
# CONNECTION DEFAULTS
# =============================================================================

DEFAULT_ALLOW_SELF_LOOPS = False
DEFAULT_EDGE_ID_LENGTH = 12

# =============================================================================
# RECONSTRUCTION LAYOUT DEFAULTS
# =============================================================================

DEFAULT_LAYOUT_X = 100.0
DEFAULT_LAYOUT_START_Y = 100.0
DEFAULT_LAYOUT_FIRST_STEP_Y = 250.0
DEFAULT_LAYOUT_SPACING_Y = 200.0

# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

DEFAULT_STORAGE_PATH = DEFAULT_WORKFLOWS_DIR
DEFAULT_FILE_EXTENSION = FILE_EXT_JSON
DEFAULT_JSON_INDENT = 2

# =============================================================================
# LOGGING DEFAULTS
# =============================================================================

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOGGER_NAME = "core.flowgraph"
