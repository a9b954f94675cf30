"""Device access declaration writer.

Run this file to write Protocol declarations for thing schemas:
    python main.py schemas.json -o thing.pyi

Or run as a module:
    python -m device_access schemas.json
"""

import sys
from pathlib import Path

# Add src to the import path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from device_access.app import main

if __name__ == "__main__":
    sys.exit(main())
