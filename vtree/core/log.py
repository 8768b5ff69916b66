################################################################################################

'''

Copyright 2025 Aaron Vose (avose@aaronvose.net)

Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

In-memory info / debug log shared by the flattening engine and the views.

'''

################################################################################################

import inspect
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

TIME_FORMAT = "%m/%d/%Y %H:%M:%S"

################################################################################################

class LogManager():
    __log: Optional[List[Tuple[str, str]]] = None

    def __init__(self, verbosity: int = 0):
        if LogManager.__log is None:
            LogManager.__log = [(self._now(), "Begin VTree Log")]
        self.verbosity = verbosity

    @staticmethod
    def _now() -> str:
        return datetime.now().strftime(TIME_FORMAT)

    def add(self, text: str):
        LogManager.__log.append((self._now(), text))

    def debug(self, text: str, level: int = 0):
        if self.verbosity < level:
            return

        # Tag the entry with the calling module's file name.
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        filename = Path(caller.f_code.co_filename).name if caller is not None else "unknown"
        self.add(f"[{filename}] {text}")

    def get(self, index: Optional[int] = None):
        if index is not None:
            return LogManager.__log[index]
        return LogManager.__log.copy()

    def messages(self) -> List[str]:
        """Log texts without timestamps."""
        return [text for _ts, text in LogManager.__log]

    def count(self) -> int:
        return len(LogManager.__log)

    def set_verbosity(self, verbosity: int = 0):
        self.verbosity = verbosity

    def clear(self):
        """Drop all entries, leaving a single marker."""
        LogManager.__log.clear()
        LogManager.__log.append((self._now(), "Log cleared"))

    def write_to_file(self, filepath: str) -> bool:
        """Write all entries to `filepath`; returns False (and logs why) on I/O failure."""
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                for timestamp, message in LogManager.__log:
                    f.write(f"[{timestamp}] {message}\n")
        except OSError as e:
            self.add(f"Failed to write log to file '{filepath}': {e}")
            return False
        self.add(f"Log written to file: {filepath}")
        return True

################################################################################################

Log = LogManager()

################################################################################################
