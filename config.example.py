# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLINE_APP_NAME": "App display name (default: taskline).",
    "TASKLINE_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKLINE_LOG_DIR": "Directory for taskline.log (default: .local/taskline).",
    # Connectors
    "TASKLINE_SERVER_ENABLED": "Start the TCP line server (true/false, default: true).",
    "TASKLINE_CONSOLE_ENABLED": "Start the interactive console (true/false, default: false).",
    # TCP server
    "TASKLINE_HOST": "Bind address (default: 127.0.0.1).",
    "TASKLINE_PORT": "TCP port, 0 picks a free one (default: 7070).",
    "TASKLINE_MAX_LINE_BYTES": "Longest accepted request line in bytes (default: 4096).",
    "TASKLINE_IDLE_TIMEOUT": "Seconds before an idle connection is closed, 0 = never (default: 300).",
}
