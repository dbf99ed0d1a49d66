"""Entry point for running the engine from a source checkout."""
import sys
from pathlib import Path

# Ensure gstinvoice is in path
root = Path(__file__).parent.resolve()
sys.path.insert(0, str(root))

from gstinvoice.cli.main import main

if __name__ == "__main__":
    main()
