"""pytest configuration for ytsearch."""

import sys
from pathlib import Path

# Makes the shared fakes importable from every test module
tests_path = Path(__file__).parent
if str(tests_path) not in sys.path:
    sys.path.insert(0, str(tests_path))
