"""Entry point for PyInstaller executable."""
import sys
from pathlib import Path

# Ensure the package root is importable when frozen
root = Path(__file__).parent.resolve()
sys.path.insert(0, str(root))

from seadocs.cli.main import main

if __name__ == "__main__":
    main()
