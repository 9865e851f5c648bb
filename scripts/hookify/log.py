"""
Hookify - Logging Module
Provides centralized logging for the rule engine and hook entry point.
"""
import sys
from datetime import datetime

from hookify import conf

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG = conf.LOG  # Set to False to disable logging
LOG_TO_STDERR = conf.LOG_TO_STDERR  # Use stderr so logs don't pollute hook stdout
LOG_FILE = conf.LOG_FILE
first_line = True

# =============================================================================
# LOGGING
# =============================================================================


def hookify_log(message: str) -> None:
    """Append a timestamped line to the log file (and stderr) if LOG is enabled."""
    global first_line
    if not LOG:
        return
    if first_line:
        first_line = False
        hookify_log("--- New Hookify Session ---")
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_line = f"[{timestamp}] {message}\n"
    if LOG_TO_STDERR:
        sys.stderr.write(log_line)
    try:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(log_line)
    except OSError:
        # An unwritable log location must not break rule evaluation
        if not LOG_TO_STDERR:
            sys.stderr.write(log_line)


def hookify_log_print() -> None:
    """Print the contents of the log file to stdout."""
    if LOG_FILE.exists():
        log_contents = LOG_FILE.read_text(encoding="utf-8")
        if log_contents:
            print(log_contents, end="")
        else:
            print("[Hookify Log is empty]")
    else:
        print("[Hookify Log file does not exist]")


def hookify_log_clear() -> None:
    """Delete the log file."""
    if LOG_FILE.exists():
        LOG_FILE.unlink()
