"""Command line client that subscribes to board channels and logs every event."""

import json
import logging
from pathlib import Path

from boardsync.lib.args import parse_listen_args
from boardsync.lib.echo import EchoClient
from boardsync.lib.events import EventName
from boardsync.lib.logger import configure_logger
from boardsync.lib.realtime_client import RealtimeClient


def log_event(event: EventName):
    def handler(payload) -> None:
        logging.info(f"{event.value}: {json.dumps(payload, default=str)}")

    return handler


def build_client(url: str, token: str | None = None, debug: bool = True) -> RealtimeClient:
    client = RealtimeClient(debug=debug)
    for event in EventName:
        client.router.define(event, log_event(event))
    client.attach_transport(EchoClient(url, token=token))
    return client


def main():
    args = parse_listen_args()
    configure_logger(args.log_level, Path(args.log_dir) if args.log_dir else None)

    client = build_client(args.url, token=args.token, debug=not args.production)
    client.start(user_id=args.user_id, board_id=args.board_id)
    client.transport.connect()
    try:
        client.transport.sio.wait()
    except KeyboardInterrupt:
        logging.info("Stopping listener")
    finally:
        client.close()


if __name__ == "__main__":
    main()
