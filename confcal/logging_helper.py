"""
Logging helper module for terminal-first logging.
All output goes to stdout with formatted prefixes, and also to a log file.
The file is opened on first write, so importing never touches the disk.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

# Get project root directory
_project_root = Path(__file__).parent.parent
_log_dir = _project_root / "logs"
_log_name = f"confcal_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
_log_file: Optional[TextIO] = None
_file_logging = True


def _open_log_file() -> Optional[TextIO]:
    global _log_file, _file_logging
    if _log_file is None and _file_logging:
        try:
            _log_dir.mkdir(parents=True, exist_ok=True)
            _log_file = open(_log_dir / _log_name, 'a', encoding='utf-8')
        except OSError as err:
            _file_logging = False
            print(f"[WARN] Unable to open log file in {_log_dir}: {err}")
    return _log_file


def _log(message: str):
    """Write message to both stdout and log file."""
    print(message)
    log_file = _open_log_file()
    if log_file is not None:
        log_file.write(message + '\n')
        log_file.flush()


class Log:
    """Simple logging class that outputs to stdout and log file with formatted prefixes."""

    @staticmethod
    def configure(log_dir: Optional[Path] = None, file_logging: bool = True):
        """
        Point the log file at another directory, or turn file output off.
        Closes the current log file; the next write reopens it.
        """
        global _log_dir, _log_file, _file_logging
        if _log_file is not None:
            _log_file.close()
            _log_file = None
        if log_dir is not None:
            _log_dir = Path(log_dir)
        _file_logging = file_logging

    @staticmethod
    def section(title: str):
        """Print a section header: blank line + '===== TITLE ====='"""
        _log("")
        _log(f"===== {title} =====")

    @staticmethod
    def info(message: str):
        """Print an info message: '[INFO] message'"""
        _log(f"[INFO] {message}")

    @staticmethod
    def warn(message: str):
        """Print a warning message: '[WARN] message'"""
        _log(f"[WARN] {message}")

    @staticmethod
    def error(message: str):
        """Print an error message: '[ERROR] message'"""
        _log(f"[ERROR] {message}")

    @staticmethod
    def kv(pairs: dict):
        """
        Print key-value pairs: '[KV] key=value | key2=value2'

        Args:
            pairs: Dictionary of key-value pairs to print
        """
        kv_string = " | ".join([f"{k}={v}" for k, v in pairs.items()])
        _log(f"[KV] {kv_string}")

    @staticmethod
    def get_log_path() -> str:
        """Get the path to the current log file."""
        return str(_log_dir / _log_name)
