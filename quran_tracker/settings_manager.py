# quran_tracker/settings_manager.py
import os
import json
import logging
from typing import Any, Optional

import platformdirs
from colorama import Fore, Style

from . import config
from .ui import THEME_COLORS

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES = {
    "theme_color": "red",
    "translation": config.DEFAULT_LANGUAGE,
    "arabic_reversed": False,
}


def default_preferences_path() -> Optional[str]:
    try:
        config_dir = platformdirs.user_config_dir(config.APP_NAME, config.APP_AUTHOR)
        os.makedirs(config_dir, exist_ok=True)
        return os.path.join(config_dir, config.SETTINGS_FILE_NAME)
    except OSError as e:
        logger.error("Could not determine preferences path: %s", e)
        return None


class SettingsManager:
    """Loads, saves and edits the user's preferences file."""

    def __init__(self, preferences_file: Optional[str] = None):
        self.preferences_file = preferences_file if preferences_file is not None else default_preferences_path()
        self.preferences = self._load_preferences()

    def _load_preferences(self) -> dict:
        preferences = dict(DEFAULT_PREFERENCES)
        if not self.preferences_file:
            return preferences
        try:
            with open(self.preferences_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return preferences
        except json.JSONDecodeError:
            print(Fore.YELLOW + f"Preferences file '{self.preferences_file}' is corrupted, resetting.")
            return preferences
        except OSError as e:
            logger.error("Error loading preferences from %s: %s", self.preferences_file, e)
            return preferences
        if isinstance(loaded, dict):
            preferences.update(loaded)
        return preferences

    def save_preferences(self) -> bool:
        if not self.preferences_file:
            print(Fore.RED + "Error: Preferences file path not set. Cannot save.")
            return False
        try:
            pref_dir = os.path.dirname(self.preferences_file)
            if pref_dir:
                os.makedirs(pref_dir, exist_ok=True)
            with open(self.preferences_file, 'w', encoding='utf-8') as f:
                json.dump(self.preferences, f, ensure_ascii=False, indent=2)
            return True
        except OSError as e:
            print(Fore.RED + f"\nError saving preferences: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self.preferences.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.preferences[key] = value
        self.save_preferences()

    def show_settings_menu(self, app):
        """Settings loop. ``app`` supplies the UI and the data handler."""
        while True:
            app.ui.clear_terminal()
            commands = [
                (f"{Fore.CYAN}theme{Style.DIM}/th{Style.RESET_ALL}", "Change ASCII art color"),
                (f"{Fore.CYAN}language{Style.DIM}/lang{Style.RESET_ALL}", "Default translation language"),
                (f"{Fore.CYAN}reverse{Style.DIM}/rev{Style.RESET_ALL}", "Toggle Arabic reversal"),
                (f"{Fore.RED}back{Style.DIM}/b{Style.RESET_ALL}", "Return to main menu"),
            ]
            app.ui.display_commands(commands)
            print(Fore.RED + f"│ {Fore.WHITE}Theme: {self.get('theme_color')}  "
                  f"Language: {self.get('translation')}  "
                  f"Arabic reversed: {'ON' if self.get('arabic_reversed') else 'OFF'}")
            try:
                user_input = input(Fore.RED + "  ❯ " + Fore.WHITE).strip().lower()
            except (KeyboardInterrupt, EOFError):
                return

            if user_input in ['back', 'b', 'q']:
                return
            elif user_input in ['theme', 'th']:
                self._handle_theme_selection(app)
            elif user_input in ['language', 'lang']:
                self._handle_language_selection(app)
            elif user_input in ['reverse', 'rev']:
                reversed_now = app.data_handler.toggle_arabic_reversal()
                self.set("arabic_reversed", reversed_now)
                app.ui.display_status(f"Arabic display reversal {'ON' if reversed_now else 'OFF'}", "success")
                app.ui.wait_for_key()
            else:
                app.ui.display_status("Invalid option. Please try again.", "warning")
                app.ui.wait_for_key()

    def _handle_theme_selection(self, app):
        names = list(THEME_COLORS)
        print(Fore.GREEN + Style.BRIGHT + "🎨 Select Theme Color for ASCII Art:")
        for idx, name in enumerate(names, 1):
            print(THEME_COLORS[name] + f"  {idx}. {name.capitalize()}")
        try:
            choice = input(Fore.BLUE + "\nEnter choice: " + Fore.WHITE).strip()
        except (KeyboardInterrupt, EOFError):
            return
        if choice.isdigit() and 1 <= int(choice) <= len(names):
            self.set('theme_color', names[int(choice) - 1])
            app.ui.display_status(f"Theme set to {names[int(choice) - 1].capitalize()}.", "success")
        else:
            app.ui.display_status("Invalid choice.", "error")
        app.ui.wait_for_key()

    def _handle_language_selection(self, app):
        app.ui.display_languages(self.get('translation'))
        try:
            choice = input(Fore.BLUE + "\nLanguage code: " + Fore.WHITE).strip().lower()
        except (KeyboardInterrupt, EOFError):
            return
        if choice in config.TRANSLATIONS:
            self.set('translation', choice)
            app.ui.display_status(f"Default translation set to {config.TRANSLATIONS[choice]}.", "success")
        else:
            app.ui.display_status("Unknown language code.", "error")
        app.ui.wait_for_key()
