# src/fcom/config.py

DEFAULT_IGNORE_NAMES = [
    ".git",
    "node_modules",
    "__pycache__",
    "target",
]

IGNORE_FILE_NAME = ".gitignore"

DEFAULT_COMBINE_OUTPUT = "output.txt"
DEFAULT_TREE_OUTPUT = "folder_tree.txt"
DEFAULT_LIST_OUTPUT = "file_list.txt"

OUTPUT_MODES = ("xml", "markdown", "custom")
DEFAULT_MODE = "xml"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LINE_NUMBER_WIDTH = 6
