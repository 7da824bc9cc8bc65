"""
gpxparser — Constants
"""

SOFT_NAME = "gpxparser"
SOFT_VERSION = "1.0"
SOFT_FULL_NAME = f"{SOFT_NAME} v{SOFT_VERSION}"

# Written on the root element when a document has no creator of its own
# and the CLI is asked to stamp one.
DEFAULT_CREATOR = SOFT_FULL_NAME

OUTPUT_VERSION = "1.1"
OUTPUT_ENCODING = "utf-8"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# YYYY-MM-DDThh:mm:ss±hhmm; %z also takes "Z" and "±hh:mm"
TIME_INPUT_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
TIME_OUTPUT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

INDENT = "\t"

GPX_NAMESPACES = (
    "http://www.topografix.com/GPX/1/0",
    "http://www.topografix.com/GPX/1/1",
)
