"""Common literal values used across docviewer.

These constants keep element names, engine-private attribute keys, and the
subsection labels centralized so the merge engine, renderer, and tests can
import the same values without drifting. Intended for internal use within the
docviewer package.

Examples
--------
>>> from docviewer import _constants
>>> _constants.INPUT, _constants.OUTPUT
('Input', 'Output')
>>> _constants.DIRECTIVE_PATTERN.match("input-from GET /widgets").group("kind")
'input'
"""

import re

DELETE_FLAG = "delete"
HTML_ATTRIBUTES = "html_attributes"
LINE_FEEDS = "line_feeds"
ANCHOR = "anchor"

INPUT = "Input"
OUTPUT = "Output"

DIRECTIVE_PATTERN = re.compile(r"^(?P<kind>input|output)-from\s(?P<reference>.+)")
MODULE_PATH_PATTERN = re.compile(r"^.+/lib/(.+)[.]pm$", re.IGNORECASE)
DEFAULT_MODULE_NAME = "pod"
