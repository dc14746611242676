import asyncio

import wireup

from billshare.cli.router import CliDispatcher
from billshare.core.config import initialize_services


async def main() -> None:
    container: wireup.AsyncContainer = await initialize_services()
    dispatcher: CliDispatcher = await container.get(CliDispatcher)
    await dispatcher.dispatch()


if __name__ == "__main__":
    asyncio.run(main())
