# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "HOMEWORK_APP_NAME": "App display name used in the console prompt (default: homework).",
    "HOMEWORK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "HOMEWORK_DATA_DIR": "Local data directory for the store and homework.log (default: .local/homework).",
    "HOMEWORK_STORE_PATH": "SQLite key-value store path (default: <data_dir>/store.sqlite3).",
    # Storage
    "HOMEWORK_STORAGE_KEY": "Key holding the JSON snapshot of all items (default: homeworkItems).",
    "HOMEWORK_STORAGE_BACKEND": "sqlite (default) or memory (nothing survives a restart).",
}
