# Ensure 'backend/' is on sys.path so 'import app.*' works when pytest is
# started from the repository root without the pyproject pythonpath setting.
from pathlib import Path
import sys

_BACKEND_ROOT = Path(__file__).resolve().parent
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))
