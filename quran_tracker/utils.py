# quran_tracker/utils.py
import os
import sys
from datetime import datetime
from typing import Optional

# This file provides path handling for bundled data (script or PyInstaller
# frozen bundle) plus the small formatting helpers shared by the UI.


def get_app_path(resource_path: str = '') -> str:
    """
    Get the absolute path to a bundled resource.

    Args:
        resource_path: Relative path to a resource/directory.
                       Leave empty for the base directory itself.

    Returns:
        Absolute path under the bundle root (sys._MEIPASS when frozen by
        PyInstaller, the project root otherwise).
    """
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        base_path = sys._MEIPASS
    else:
        # utils.py lives in quran_tracker/, so the project root is one level up
        base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    return os.path.join(base_path, resource_path) if resource_path else base_path


def format_time(seconds: int) -> str:
    """Stats style: M:SS, or H:MM:SS once an hour has passed."""
    hrs, rem = divmod(int(seconds), 3600)
    mins, secs = divmod(rem, 60)
    if hrs > 0:
        return f"{hrs}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def format_timer_time(seconds: int) -> str:
    """Stopwatch style: always HH:MM:SS."""
    hrs, rem = divmod(int(seconds), 3600)
    mins, secs = divmod(rem, 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"


def greeting_for_hour(hour: int) -> str:
    if 5 <= hour < 12:
        return "Good Morning"
    if 12 <= hour < 18:
        return "Good Afternoon"
    if 18 <= hour < 22:
        return "Good Evening"
    return "Good Night"


def greeting_line(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"Assalamu'alaikum ({greeting_for_hour(now.hour)})"


def date_time_line(now: Optional[datetime] = None) -> str:
    """e.g. 'Sunday, October 18, 2026, 09:05 AM'"""
    now = now or datetime.now()
    return now.strftime("%A, %B %d, %Y, %I:%M %p")


def wrap_text(text: str, width: int) -> str:
    """Wrap text to specified width"""
    words = text.split()
    lines = []
    current_line = []
    current_length = 0

    for word in words:
        if current_line and current_length + len(word) + 1 > width:
            lines.append(' '.join(current_line))
            current_line = [word]
            current_length = len(word)
        else:
            current_line.append(word)
            current_length += len(word) + (1 if current_length else 0)

    if current_line:
        lines.append(' '.join(current_line))

    return '\n'.join(lines)
