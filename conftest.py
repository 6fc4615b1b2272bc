import os
import sys
import tempfile
from pathlib import Path

# Keep test runs from writing cfgevo.log into the working directory
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "cfgevo-tests.log"))

# This conftest lives at <project_root>/conftest.py
PROJECT_ROOT = Path(__file__).resolve().parent

# Ensure project root is first so `import cfgevo` resolves without installing
proj = str(PROJECT_ROOT)
if proj not in sys.path:
    sys.path.insert(0, proj)
