from __future__ import annotations
import pathlib

BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"

# "--" only starts a comment when followed by a space
LINE_COMMENT_MARKERS = ("-- ", "#")

TERMINATOR = ";"

DEFAULT_CONFIG_PATH = pathlib.Path("sqlimport.config.yml")
DEFAULT_ENCODING = "utf-8"
