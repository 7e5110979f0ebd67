#!/usr/bin/env python3
"""Basic usage example"""

from pathlib import Path

from ns_logger import LoggerFactory, load_config

def main():
    # Build transports once from examples/config
    config = load_config(Path(__file__).parent / "config")
    factory = LoggerFactory.from_config(config)

    db = factory.create_logger("db")
    http = factory.create_logger("http:server", message=True)
    worker = factory.create_logger("worker")

    # Console shows db and http:*, the file receives everything
    db.info("connected")
    db.debug("pool ready", size=10)
    http.info("request handled", {"status": 200})
    worker.warn("queue is filling up", depth=900)
    db.error("connection lost")

    # Flush and shutdown
    factory.close()

if __name__ == "__main__":
    main()
