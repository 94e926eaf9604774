"""Enable running steam-app-update-check as a module: python -m steam_update_check."""

import sys

from steam_update_check.cli import main

if __name__ == "__main__":
    sys.exit(main())
