'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

# Shared UI constants
NODE_NESTING_MULTIPLIER = 10
DEFAULT_ROW_H = 22
OVERSCAN_ROW_COUNT = 10
PADDING = 4
GUTTER_W = 16
ALIGNMENTS = ("auto", "start", "end", "center")

# Caret glyphs
CARET_OPEN = "▼"
CARET_CLOSED = "▶"
CARET_LEAF = "•"
