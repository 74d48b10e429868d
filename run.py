"""Launch Cosmoscale."""

import sys
from pathlib import Path

# Add src to path so cosmoscale package is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cosmoscale.__main__ import main

if __name__ == "__main__":
    main()
