#!/usr/bin/env python3
"""
Hookify - Plugin Hook Launcher
Invoked from hooks/hooks.json as `python "$CLAUDE_PLUGIN_ROOT/scripts/main.py" <hook>`.
"""
import sys

from hookify.main import main

if __name__ == "__main__":
    sys.exit(main())
