"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are report layout and interchange format details.

For configurable values, see models.py (ReportConfig, ExportConfig).
"""

# =============================================================================
# Report Layout
# =============================================================================

RULE_WIDTH = 80
"""Width of the ``=`` and ``-`` rules framing the report."""

SUMMARY_RULE_WIDTH = 40
"""Width of the rule under the SUMMARY heading."""

PATH_COLUMN_WIDTH = 60
"""Padded width of the file column in the verbose table."""

COUNT_COLUMN_WIDTH = 8
"""Width of the Lines and Cover columns."""

RATE_COLUMN_WIDTH = 7
"""Width of the Rate column header (value is 6 wide plus ``%``)."""

SUMMARY_COUNT_WIDTH = 6
"""Width of covered/total counts in the summary block."""

ELLIPSIS = "..."
"""Marker prefixed to paths truncated from the front."""

BAR_FILLED = "█"
BAR_EMPTY = "░"
"""Glyphs for the proportional coverage bar."""

# =============================================================================
# Input Discovery
# =============================================================================

DEFAULT_FILE_PATTERN = "CoverageReport_*.xml"
"""Report documents picked up when a directory is scanned."""

# =============================================================================
# Cobertura Interchange
# =============================================================================

COBERTURA_DTD = "http://cobertura.sourceforge.net/xml/coverage-04.dtd"
COBERTURA_VERSION = "1.0"
DEFAULT_PACKAGE_NAME = "WinCC_OA"
