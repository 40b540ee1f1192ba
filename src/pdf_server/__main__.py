import argparse
import socket
import sys

import uvicorn

from .app import app
from .core.config import get_settings


def is_port_available(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
            return True
        except OSError:
            return False


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="pdf-server",
        description="HTTP server that turns text and webpages into PDF files",
    )
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    return parser


def main() -> None:
    args = build_parser().parse_args()

    if not is_port_available(args.host, args.port):
        print(f"Error: port {args.port} is already in use on {args.host}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
