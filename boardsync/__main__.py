"""Entry point for running the board realtime server as a module.

This file allows the server to be run with: python -m boardsync
"""

from boardsync.app import main

if __name__ == "__main__":
    main()
