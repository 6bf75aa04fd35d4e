"""Entry point for running the Royal Mail tracking MCP server."""

from __future__ import annotations

import logging
from os import environ

from royalmail_tracking.server import create_server


def main() -> None:
    logging.basicConfig(
        level=environ.get('ROYALMAIL_LOG_LEVEL', 'WARNING').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    server = create_server()
    server.run()


if __name__ == '__main__':
    main()
