# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: shared-tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": (
        "Local data directory (default: .local/shared-tasklist). "
        "Lists live in <data_dir>/tasks/<list_id>.json."
    ),
    # Task list
    "TASKLIST_DEFAULT_LIST_ID": "List used when a call does not name one (default: default).",
    "TASKLIST_AGENT_NAME": "Owner recorded by /claim in the console (default: console).",
    # Connectors
    "TASKLIST_CONSOLE_ENABLED": "Enable console connector (true/false).",
}
