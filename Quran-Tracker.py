# Quran-Tracker.py
import sys

try:
    from quran_tracker.app import main
except ImportError as e:
    print(f"Fatal: Could not import quran_tracker ({e}). Run 'pip install -e .' first.", file=sys.stderr)
    sys.exit(1)

if __name__ == "__main__":
    main()
