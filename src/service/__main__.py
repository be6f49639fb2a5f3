"""Run the emulator service: python -m service [--scenario KEY] [--host H] [--port P]"""

import argparse

import uvicorn

from service.config import settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="Entity emulator service")
    parser.add_argument("--scenario", type=str, default=None, help="Initial scenario key")
    parser.add_argument("--host", type=str, default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Listen port")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    args = parser.parse_args(argv)

    if args.scenario:
        settings.scenario = args.scenario
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.seed is not None:
        settings.random_seed = args.seed

    uvicorn.run("service.main:app", host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
