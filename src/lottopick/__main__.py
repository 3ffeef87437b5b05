#!/usr/bin/env python3
from __future__ import annotations
import argparse

import uvicorn


def main():
    ap = argparse.ArgumentParser(description="Serve the lottery number picker API.")
    ap.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    ap.add_argument("--port", type=int, default=8000, help="Port to listen on")
    args = ap.parse_args()
    uvicorn.run("lottopick.api:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
