"""
Simple download progress bar without external dependencies.
"""

import shutil
import sys
import time


class ProgressBar:
    """A single-line progress bar for byte transfers, drawn on stderr."""

    def __init__(self, total, desc=None, stream=None):
        """
        Initialize a progress bar.

        Args:
            total: Expected number of bytes, 0 when unknown
            desc: Description to show before the bar
            stream: Output stream (default: sys.stderr)
        """
        self.total = total
        self.desc = desc
        self.stream = stream or sys.stderr
        self.current = 0
        self.start_time = time.time()
        self.last_update = 0.0
        self.ncols = self._get_terminal_width() - 1
        self.closed = False

        # Minimum time between redraws in seconds
        self.min_interval = 0.1

    def _get_terminal_width(self):
        try:
            return shutil.get_terminal_size().columns
        except (AttributeError, OSError):
            return 80

    @staticmethod
    def format_size(num):
        """Format a byte count with binary units."""
        for unit in ["B", "KiB", "MiB", "GiB"]:
            if abs(num) < 1024.0:
                return f"{num:3.1f} {unit}"
            num /= 1024.0
        return f"{num:.1f} TiB"

    def update(self, n):
        """Advance the bar by n bytes."""
        self.current += n
        now = time.time()
        if now - self.last_update < self.min_interval:
            return
        self.last_update = now
        self._display()

    def render(self):
        """Return the current bar as a string."""
        desc_str = f"{self.desc}: " if self.desc else ""
        elapsed = time.time() - self.start_time
        rate = self.current / elapsed if elapsed > 0 else 0

        if not self.total:
            # Unknown size, show the transferred amount only
            return f"{desc_str}{self.format_size(self.current)} [{self.format_size(rate)}/s]"

        percent = min(100.0, 100 * self.current / self.total)
        stats_str = (
            f" {self.format_size(self.current)}/{self.format_size(self.total)}"
            f" [{self.format_size(rate)}/s]"
        )
        bar_width = max(10, self.ncols - len(desc_str) - len(stats_str) - 7)
        filled = int(bar_width * percent // 100)
        line = f"{desc_str}[{'#' * filled}{'-' * (bar_width - filled)}] {percent:3.0f}%{stats_str}"
        if len(line) > self.ncols:
            line = line[: self.ncols - 3] + "..."
        return line

    def _display(self):
        if self.closed:
            return
        self.stream.write("\r" + self.render())
        self.stream.flush()

    def close(self):
        """Draw the final state and end the line."""
        if not self.closed:
            self._display()
            self.stream.write("\n")
            self.stream.flush()
            self.closed = True
