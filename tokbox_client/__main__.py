"""Package entry point for ``python -m tokbox_client``.

WHY: Operators run one-off commands (create a session, list or stop
archives, mint a token) as ``python -m tokbox_client <command>``.

HOW: Delegates to the CLI's main() function.
"""

import sys

from tokbox_client.cli import main

if __name__ == "__main__":
    sys.exit(main())
