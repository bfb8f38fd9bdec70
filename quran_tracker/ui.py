# quran_tracker/ui.py
import re
import sys
import math
import shutil
from datetime import datetime
from typing import List, Optional

from colorama import Fore, Style

from . import config
from .models import ComposedChapter, DisplayUnit, RandomVerse, ReadingStats, UnitRole
from .quran_data_handler import QuranDataHandler
from .session import Stopwatch
from .utils import date_time_line, format_time, format_timer_time, greeting_line, wrap_text

QURAN_TRACKER_ASCII = """
  ___                          _____             _
 / _ \\ _   _ _ __ __ _ _ __   |_   _| __ __ _  ___| | _____ _ __
| | | | | | | '__/ _` | '_ \\    | || '__/ _` |/ __| |/ / _ \\ '__|
| |_| | |_| | | | (_| | | | |   | || | | (_| | (__|   <  __/ |
 \\__\\_\\\\__,_|_|  \\__,_|_| |_|   |_||_|  \\__,_|\\___|_|\\_\\___|_|
"""

STATUS_STYLES = {
    "success": (Fore.GREEN, "✓"),
    "info": (Fore.CYAN, "ⓘ"),
    "warning": (Fore.YELLOW, "⚠"),
    "error": (Fore.RED, "✗"),
}

THEME_COLORS = {
    'red': Fore.RED,
    'white': Fore.WHITE,
    'green': Fore.GREEN,
    'blue': Fore.BLUE,
    'yellow': Fore.YELLOW,
    'magenta': Fore.MAGENTA,
    'cyan': Fore.CYAN,
}


def strip_ansi(s: str) -> str:
    """Remove ANSI escape codes for accurate length calculation."""
    return re.sub(r'\x1B\[[0-?]*[ -/]*[@-~]', '', s)


class UI:
    def __init__(self, data_handler: QuranDataHandler, term_size=None, preferences: Optional[dict] = None):
        """
        Args:
            data_handler: Source of the Arabic/RTL text formatting.
            term_size: Terminal size (shutil.get_terminal_size() when omitted).
            preferences: Loaded preferences; only ``theme_color`` is read here.
        """
        self.data_handler = data_handler
        self.term_size = term_size or shutil.get_terminal_size()
        self.preferences = preferences if preferences is not None else {}

    def clear_terminal(self):
        """Clear terminal with scroll reset"""
        print("\033[2J", end="")
        print("\033[H", end="")
        sys.stdout.write("\033[3J")
        sys.stdout.flush()

    def display_header(self, stats: ReadingStats, now: Optional[datetime] = None):
        color = THEME_COLORS.get(self.preferences.get('theme_color', 'red'), Fore.RED)
        print(color + QURAN_TRACKER_ASCII + Style.RESET_ALL)
        print(Fore.RED + "╭──" + Style.BRIGHT + Fore.GREEN + f" {greeting_line(now)} " + Style.NORMAL + Fore.RED + "─" * 10)
        print(Fore.RED + "│ " + Fore.WHITE + date_time_line(now))
        print(Fore.RED + "├" + "─" * 50)
        self._print_stats_rows(stats)
        print(Fore.RED + "╰" + "─" * 50 + "\n")

    def _print_stats_rows(self, stats: ReadingStats):
        rows = [
            ("Surahs read", str(stats.surahs_read)),
            ("Time spent", format_time(stats.time_spent)),
            ("Day streak", str(stats.day_streak)),
        ]
        for label, value in rows:
            print(Fore.RED + f"│ • {Fore.CYAN}{label.ljust(12)}{Fore.WHITE}: {value}")

    def display_status(self, message: str, kind: str = "info"):
        color, icon = STATUS_STYLES.get(kind, STATUS_STYLES["info"])
        print(color + f"{icon} {message}" + Style.RESET_ALL)

    def display_stats(self, stats: ReadingStats):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "📊 Reading Stats")
        self._print_stats_rows(stats)
        print(Fore.RED + "╰" + "─" * 30)

    def display_timer(self, stopwatch: Stopwatch):
        state = "running" if stopwatch.running else ("paused" if stopwatch.elapsed else "stopped")
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "⏱ Reading Timer")
        print(Fore.RED + f"│ {Fore.WHITE}{format_timer_time(stopwatch.elapsed)} {Style.DIM}({state}){Style.RESET_ALL}")
        print(Fore.RED + "╰" + "─" * 30)

    def display_trivia(self, fact: str):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "💡 Did you know?")
        for line in wrap_text(fact, self.term_size.columns - 4).split('\n'):
            print(Fore.RED + "│ " + Fore.WHITE + line)
        print(Fore.RED + "╰" + "─" * 30)

    def display_donation(self):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "🤲 Support (Sadaqah)")
        print(Fore.RED + "│ " + Fore.WHITE + "If this app benefits you, consider supporting it:")
        print(Fore.RED + "│ " + Fore.CYAN + config.DONATION_LINK)
        print(Fore.RED + "╰" + "─" * 30)

    def display_surah_list(self, titles: dict, columns: int = 4):
        """Display surah titles in multiple columns."""
        numbers = sorted(titles)
        per_column = max(1, math.ceil(len(numbers) / columns))
        print(Fore.GREEN + Style.BRIGHT + "Quran - List of Surahs:")
        print(Fore.CYAN + "-" * 25)
        for row in range(per_column):
            cells = []
            for col in range(columns):
                idx = row + col * per_column
                if idx < len(numbers):
                    cells.append(Fore.WHITE + titles[numbers[idx]].ljust(30))
            print("".join(cells))
        print(Fore.CYAN + "-" * 25)

    def display_languages(self, current: str):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "🌐 Translations")
        for code, name in config.TRANSLATIONS.items():
            marker = Fore.GREEN + "✓" if code == current else " "
            print(Fore.RED + f"│ {marker} {Fore.CYAN}{code.ljust(3)}{Fore.WHITE}: {name} ({code.upper()})")
        print(Fore.RED + "╰" + "─" * 30)

    def display_random_verse(self, verse: RandomVerse, language: str):
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "📖 Verse of the moment")
        print(Fore.RED + "│ " + Fore.WHITE + self.data_handler.fix_arabic_text(verse.text))
        translation = self.data_handler.format_for_language(verse.translation, language)
        for line in wrap_text(translation, self.term_size.columns - 4).split('\n'):
            print(Fore.RED + "│ " + Style.DIM + Fore.WHITE + line + Style.RESET_ALL)
        print(Fore.RED + "│ " + Fore.CYAN + verse.reference)
        print(Fore.RED + "╰" + "─" * 30)

    def display_load_error(self, chapter_number, error: Exception):
        print(Fore.RED + "╭─ " + Style.BRIGHT + f"⚠ Failed to Load Surah {chapter_number}")
        print(Fore.RED + "│ " + Fore.WHITE + str(error))
        print(Fore.RED + "│ " + Fore.YELLOW + "Type 'retry' to try loading it again.")
        print(Fore.RED + "╰" + "─" * 30)

    def format_unit(self, unit: DisplayUnit, language: str) -> List[str]:
        """Lines for one display unit: Arabic text, then the wrapped translation."""
        width = max(20, self.term_size.columns - 4)
        arabic = self.data_handler.fix_arabic_text(unit.text)
        translation = self.data_handler.format_for_language(unit.translation, language)

        if unit.role in (UnitRole.OPENER, UnitRole.SPLIT_OPENER):
            lines = [Style.BRIGHT + Fore.GREEN + arabic.center(width)]
            lines.append(Style.DIM + Fore.WHITE + unit.translation.center(width) + Style.RESET_ALL)
            return lines

        lines = [Style.BRIGHT + Fore.GREEN + f"[{unit.verse_number}] " + Style.NORMAL + Fore.WHITE + arabic]
        for line in wrap_text(translation, width).split('\n'):
            lines.append("    " + Fore.WHITE + line)
        return lines

    def display_chapter_header(self, composed: ComposedChapter, title: str, language: str):
        print(Style.BRIGHT + Fore.RED + "=" * self.term_size.columns)
        print(f"\U0001F4D6 {title}")
        print(f"{composed.verse_count} verses")
        print(f"Translation: {config.TRANSLATIONS.get(language, 'English')}")
        print(Style.BRIGHT + Fore.RED + "=" * self.term_size.columns)

    def paginate_output(self, composed: ComposedChapter, title: str, language: str, page_size: int = None):
        """
        Show a composed surah a page at a time.

        'n' / Enter moves forward, 'p' back, 'q' returns. Enter on the last page returns too.
        """
        if page_size is None:
            page_size = max(1, (self.term_size.lines - 8) // 4)
        units = composed.units
        total_pages = max(1, math.ceil(len(units) / page_size))
        current_page = 1

        while True:
            self.clear_terminal()
            self.display_chapter_header(composed, title, language)
            print(f"Page {current_page}/{total_pages}")

            start = (current_page - 1) * page_size
            for unit in units[start:start + page_size]:
                for line in self.format_unit(unit, language):
                    print(line)
                print(Style.BRIGHT + Fore.GREEN + "-" * min(40, self.term_size.columns))

            print(Fore.RED + "\n╭─ " + Style.BRIGHT + Fore.GREEN + "\U0001F9ED Navigation")
            print(Fore.RED + f"│ → {Fore.CYAN}n{Fore.WHITE} : Next page")
            print(Fore.RED + f"│ → {Fore.CYAN}p{Fore.WHITE} : Previous page")
            print(Fore.RED + f"│ → {Fore.CYAN}q{Fore.WHITE} : Return")
            print(Fore.RED + "╰" + "─" * 26)

            try:
                choice = input(Fore.RED + "  ❯ " + Fore.WHITE).lower().strip()
            except (KeyboardInterrupt, EOFError):
                return
            if choice == 'n' and current_page < total_pages:
                current_page += 1
            elif choice == 'p' and current_page > 1:
                current_page -= 1
            elif choice == 'q':
                return
            elif not choice:
                if current_page < total_pages:
                    current_page += 1
                else:
                    return

    def display_commands(self, commands):
        max_cmd_len = max(len(strip_ansi(cmd)) for cmd, _ in commands)
        print(Fore.RED + "╭─ " + Style.BRIGHT + Fore.GREEN + "Commands")
        for cmd, desc in commands:
            pad = " " * (max_cmd_len - len(strip_ansi(cmd)))
            print(Fore.RED + f"├─ {cmd}{pad} : {Style.NORMAL}{Fore.WHITE}{desc}{Style.RESET_ALL}")
        print(Fore.RED + "╰────────────────────────────────────────")

    def wait_for_key(self):
        try:
            input(Fore.YELLOW + "\nPress Enter to continue..." + Style.RESET_ALL)
        except (KeyboardInterrupt, EOFError):
            return
