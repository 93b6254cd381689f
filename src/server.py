"""Protean Engine runner for the inventory domain.

Starts Engine workers that process events asynchronously when the domain
runs with event_processing = "async" (PROTEAN_ENV=production):
- OutboxProcessor: publishes raised ledger events to the broker
- StreamSubscriptions: invokes projectors and catalogue event handlers

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from inventory.domain import inventory

    inventory.init()
    await Engine(inventory).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
