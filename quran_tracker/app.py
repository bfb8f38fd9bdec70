# quran_tracker/app.py
import sys
import logging
import shutil
import concurrent.futures
from typing import Optional

from colorama import Fore, Style, init

from . import config
from .errors import DataSourceFetchFailed, QuranTrackerError, SessionBusy
from .quran_data_handler import QuranDataHandler
from .session import ReadingSession
from .settings_manager import SettingsManager
from .ui import UI

logger = logging.getLogger(__name__)

COMMANDS = [
    (f"{Fore.CYAN}1-114{Style.RESET_ALL}", "Read a surah by number"),
    (f"{Fore.CYAN}list{Style.DIM}/ls{Style.RESET_ALL}", "Display list of surahs"),
    (f"{Fore.CYAN}lang{Style.DIM} <code>{Style.RESET_ALL}", "Switch translation (en, ms, id, ur, tr)"),
    (f"{Fore.CYAN}timer{Style.DIM}/t{Style.RESET_ALL}", "Start / pause the reading timer"),
    (f"{Fore.CYAN}reset{Style.RESET_ALL}", "Reset the reading timer"),
    (f"{Fore.CYAN}stats{Style.DIM}/st{Style.RESET_ALL}", "Show reading stats"),
    (f"{Fore.CYAN}trivia{Style.DIM}/tv{Style.RESET_ALL}", "Show another Quran fact"),
    (f"{Fore.CYAN}verse{Style.DIM}/v{Style.RESET_ALL}", "Show a random verse"),
    (f"{Fore.CYAN}prefetch{Style.DIM}/pf{Style.RESET_ALL}", "Download all translations for offline use"),
    (f"{Fore.CYAN}settings{Style.DIM}/set{Style.RESET_ALL}", "Theme, default language, Arabic reversal"),
    (f"{Fore.CYAN}support{Style.DIM}/sadaqah{Style.RESET_ALL}", "Support the project"),
    (f"{Fore.CYAN}quit{Style.DIM}/q{Style.RESET_ALL}", "Exit the application"),
]


class QuranApp:
    def __init__(self, data_handler: Optional[QuranDataHandler] = None,
                 settings: Optional[SettingsManager] = None, term_size=None):
        self.settings = settings or SettingsManager()
        self.data_handler = data_handler or QuranDataHandler()
        self.data_handler.arabic_reversed = bool(self.settings.get("arabic_reversed", False))
        self.ui = UI(self.data_handler, term_size or shutil.get_terminal_size(), self.settings.preferences)
        self.session = ReadingSession(self.data_handler, language=self.settings.get("translation", config.DEFAULT_LANGUAGE))
        self.last_failed: Optional[int] = None
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        self._prefetch_job: Optional[concurrent.futures.Future] = None

    def startup(self):
        """Load the surah text and the default translation. Failures are reported, not fatal."""
        try:
            self.data_handler.chapters.load()
        except DataSourceFetchFailed as e:
            self.ui.display_status(
                f"{e}. Point QURAN_TRACKER_DATA_SOURCE at a folder or URL holding {config.QURAN_FILE}, "
                "then type a surah number to retry.", "error")
            return
        warning = self.session.ensure_translation(self.session.language)
        if warning:
            self.ui.display_status(warning, "warning")

    def read_chapter(self, number: int) -> bool:
        """Load, compose and page through a surah. Returns True on success."""
        self.ui.display_status(f"Loading Surah {number}...", "info")
        try:
            composed = self.session.load_chapter(number)
        except SessionBusy as e:
            self.ui.display_status(str(e), "warning")
            return False
        except QuranTrackerError as e:
            logger.error("Failed to load surah %s: %s", number, e)
            self.last_failed = number
            self.ui.display_load_error(number, e)
            self.ui.display_status(f"Failed to load surah: {e}", "error")
            return False

        self.last_failed = None
        self.ui.display_status(f"Surah {number} loaded!", "success")
        if self.session.last_warning:
            self.ui.display_status(self.session.last_warning, "warning")
        self._show_current(composed)
        return True

    def _show_current(self, composed):
        chapter = self.data_handler.chapters.find_chapter(composed.chapter_number)
        title = chapter.title if chapter else f"Surah {composed.chapter_number}"
        self.ui.paginate_output(composed, title, self.session.language)

    def switch_language(self, language: str):
        if language not in config.TRANSLATIONS:
            self.ui.display_status(f"Unknown language '{language}'.", "error")
            self.ui.display_languages(self.session.language)
            return
        self.ui.display_status(f"Switching to {config.TRANSLATIONS[language]}...", "info")
        warning = self.session.switch_language(language)
        if warning:
            self.ui.display_status(warning, "warning")
        else:
            self.ui.display_status(f"Translation: {config.TRANSLATIONS[language]}", "success")
        composed = self.session.recompose()
        if composed is not None:
            self._show_current(composed)

    def toggle_timer(self):
        running = self.session.stopwatch.toggle()
        self.session.sync_time()
        self.ui.display_status("Timer started." if running else "Timer paused.", "info")
        self.ui.display_timer(self.session.stopwatch)

    def reset_timer(self):
        self.session.stopwatch.reset()
        self.ui.display_status("Timer reset.", "info")
        self.ui.display_timer(self.session.stopwatch)

    def show_random_verse(self):
        try:
            verse = self.data_handler.random_verse(self.session.language)
        except QuranTrackerError as e:
            logger.error("Error fetching verse: %s", e)
            self.ui.display_status("Failed to load new verse", "error")
            return
        self.ui.display_random_verse(verse, self.session.language)
        self.ui.display_status("New verse loaded!", "success")

    def prefetch(self):
        """Download every translation set in the background while reading goes on."""
        if self._prefetch_job is not None and not self._prefetch_job.done():
            self.ui.display_status("Translations are already downloading.", "info")
            return
        self.ui.display_status("Downloading translations in the background...", "info")
        self._prefetch_job = self._executor.submit(self.data_handler.translations.prefetch, show_progress=False)

    def report_prefetch(self):
        """Print the outcome of a finished background download, once."""
        if self._prefetch_job is None or not self._prefetch_job.done():
            return
        job, self._prefetch_job = self._prefetch_job, None
        try:
            failed = job.result()
        except Exception as e:
            logger.exception("Translation download failed")
            self.ui.display_status(f"Translation download failed: {e}", "error")
            return
        if failed:
            self.ui.display_status(f"Could not download: {', '.join(failed)}", "warning")
        else:
            self.ui.display_status("All translations cached.", "success")

    def show_surah_list(self):
        try:
            titles = self.data_handler.chapters.chapter_titles()
        except DataSourceFetchFailed as e:
            self.ui.display_status(str(e), "error")
            return
        self.ui.display_surah_list(titles)

    def handle_command(self, command: str) -> bool:
        """Run one command line. Returns False when the user asked to quit."""
        parts = command.strip().split()
        if not parts:
            return True
        name, args = parts[0].lower(), parts[1:]
        self.session.sync_time()
        self.report_prefetch()

        if name in ('quit', 'q', 'exit'):
            return False
        if name.isdigit():
            self.read_chapter(int(name))
        elif name in ('read', 'r') and args and args[0].isdigit():
            self.read_chapter(int(args[0]))
        elif name == 'retry':
            if self.last_failed is None:
                self.ui.display_status("Nothing to retry.", "info")
            else:
                self.read_chapter(self.last_failed)
        elif name in ('list', 'ls'):
            self.show_surah_list()
        elif name in ('lang', 'language', 'l'):
            if args:
                self.switch_language(args[0].lower())
            else:
                self.ui.display_languages(self.session.language)
        elif name in ('timer', 't'):
            self.toggle_timer()
        elif name == 'reset':
            self.reset_timer()
        elif name in ('stats', 'st'):
            self.ui.display_stats(self.session.stats)
        elif name in ('trivia', 'tv'):
            self.ui.display_trivia(self.session.trivia.advance())
        elif name in ('verse', 'v'):
            self.show_random_verse()
        elif name in ('prefetch', 'pf'):
            self.prefetch()
        elif name in ('settings', 'set'):
            self.settings.show_settings_menu(self)
        elif name in ('support', 'sadaqah', 'donate'):
            self.ui.display_donation()
        elif name in ('help', 'h', 'info'):
            self.ui.display_commands(COMMANDS)
        else:
            self.ui.display_status(f"Unknown command '{name}'. Type 'help' for the list.", "warning")
        return True

    def run(self):
        self.ui.clear_terminal()
        self.ui.display_header(self.session.stats)
        self.ui.display_trivia(self.session.trivia.current)
        self.startup()
        self.ui.display_commands(COMMANDS)
        while True:
            try:
                command = input(Fore.RED + "  ❯ " + Fore.WHITE)
            except EOFError:
                break
            if not self.handle_command(command):
                break
        self._executor.shutdown(wait=False)
        self.session.sync_time()
        self.ui.display_stats(self.session.stats)
        print(Fore.GREEN + "Jazak Allah Khair for reading. Goodbye!" + Style.RESET_ALL)


def main():
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init(autoreset=True)
    try:
        QuranApp().run()
    except KeyboardInterrupt:
        print(Fore.YELLOW + "\n\n⚠ Interrupted! Exiting.")
        sys.exit(0)


if __name__ == "__main__":
    main()
