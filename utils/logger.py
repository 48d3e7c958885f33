import datetime
import os

LOG_DIR_ENV = "HOSTLOOKUP_LOG_DIR"
LOG_FILE = "hostlookup_log.txt"


def log_path():
    """Path of the run log, or None when logging is not configured."""
    log_dir = os.environ.get(LOG_DIR_ENV)
    if not log_dir:
        return None
    return os.path.join(log_dir, LOG_FILE)


def log_message(text):
    path = log_path()
    if path is None:
        return

    os.makedirs(os.path.dirname(path), exist_ok=True)

    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    with open(path, "a", encoding="utf-8", errors="backslashreplace") as f:
        f.write(f"[{timestamp}] {text}\n")
