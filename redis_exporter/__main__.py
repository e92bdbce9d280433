"""Entry point — python -m redis_exporter."""

from __future__ import annotations

import argparse
import asyncio


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="redis_exporter",
        description="Scrapes redis INFO stats and exports them for Prometheus",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration YAML file",
        default=None,
    )
    parser.add_argument("--bind", help="Listen address (default :9379)", default=None)
    parser.add_argument(
        "--redis",
        help="Redis service address, [password@]host:port (default 127.0.0.1:6379)",
        default=None,
    )
    parser.add_argument("--name", help="Redis service name (default none)", default=None)
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Connect/read/write timeout in seconds (default 5)",
    )
    args = parser.parse_args()

    from redis_exporter.app import Application

    app = Application(
        config_path=args.config,
        overrides={
            "bind": args.bind,
            "redis": args.redis,
            "name": args.name,
            "timeout": args.timeout,
        },
    )
    try:
        asyncio.run(app.start())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
