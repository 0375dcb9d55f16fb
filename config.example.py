# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use a local, gitignored .env for machine-specific values.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "App display name (default: taskpad).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Front-ends
    "TASKPAD_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    "TASKPAD_NOTIFIER_ENABLED": "Run the due-soon reminder loop (true/false, default: true).",
    # Reminders
    "TASKPAD_DUE_WINDOW_MINUTES": "A task is 'due soon' within this many minutes (default: 60).",
    "TASKPAD_NOTIFY_INTERVAL_SECONDS": "How often the reminder loop polls (default: 30).",
    # Paths (gitignored)
    "TASKPAD_DATA_DIR": "Local data directory for logs and the database (default: .local/taskpad).",
    "TASKPAD_TASKS_DB_PATH": (
        "SQLite path (default: <data_dir>/tasks.sqlite3). Use :memory: to keep nothing on disk."
    ),
}
