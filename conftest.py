"""Root conftest.py to configure pytest."""

import sys
from pathlib import Path

# Add project root to sys.path so 'baasix_mcp' imports without installing
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
