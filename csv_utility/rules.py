"""
Deterministic CSV and transfer rules.

This file exists to make the file format and naming conventions explicit.
"""

DELIMITER = ","
QUOTE = '"'
ROW_TERMINATOR = "\n"
TARGET_ENCODING = "utf-8"

# A field containing any of these is written quoted.
QUOTE_TRIGGERS = (DELIMITER, QUOTE, "\n", "\r")

CSV_EXTENSION = "csv"
ASSET_SUFFIX = ".asset"

# Header columns used (in order) to name imported assets.
ASSET_NAME_COLUMNS = ("name", "id")

DEFAULT_EXPORT_FOLDER = "Assets/ScriptableObjects"
DEFAULT_IMPORT_FOLDER = "Assets/ImportedScriptableObjects"
DEFAULT_CSV_PATH = "Assets/data.csv"
DEFAULT_SAVE_NAME = "data.csv"
