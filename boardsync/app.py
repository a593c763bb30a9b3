import logging
from pathlib import Path

from flask import Flask
from flask_socketio import SocketIO

from boardsync.config import Config, ConfigType
from boardsync.lib.args import parse_server_args
from boardsync.lib.broadcaster import Broadcaster
from boardsync.lib.logger import configure_logger
from boardsync.routes.broadcast import broadcast_bp
from boardsync.routes.socket_events import setup_socket_events


def create_app(config: type[Config] = ConfigType.DEVELOPMENT.value, async_mode: str | None = None):
    """Build the Flask app with its SocketIO server and broadcaster.

    Returns:
        tuple[Flask, SocketIO]: The app and the SocketIO instance bound to it.
    """
    app = Flask(__name__)
    app.config.from_object(config)

    socketio = SocketIO(
        app,
        async_mode=async_mode,
        cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
    )

    app.register_blueprint(broadcast_bp)
    setup_socket_events(socketio)

    # expose the broadcaster to the routes
    app.broadcaster = Broadcaster(socketio)
    return app, socketio


def main():
    from gevent import monkey

    monkey.patch_all()

    from gevent.pywsgi import WSGIServer

    args = parse_server_args()
    configure_logger(args.log_level, Path(args.log_dir) if args.log_dir else None)

    config = ConfigType.PRODUCTION if args.production else ConfigType.DEVELOPMENT
    app, socketio = create_app(config.value, async_mode="gevent")
    logging.info(f"Starting realtime server on {args.host}:{args.port} ({config.name.lower()})")

    server = WSGIServer((args.host, int(args.port)), app, log=None, error_log=logging.getLogger())
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("Shutting down realtime server")
        server.stop()


if __name__ == "__main__":
    main()
