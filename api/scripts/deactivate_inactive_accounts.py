#!/usr/bin/env python3
"""
Deactivate accounts that have not signed in for INACTIVE_DAYS (default 90).

Usage:
    python scripts/deactivate_inactive_accounts.py

Exits 0 on success (including when nothing needed deactivating), 1 on error.
"""

import sys
import os

# Add parent directory to path so we can import the package without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from notes_api.jobs import main


if __name__ == "__main__":
    sys.exit(main())
