"""Store export entry point.

Asks for an Ecwid API method (e.g. "products"), downloads every item of it
through the batch endpoint and saves the result as ``{method}.json``.

Usage:
    python -m services.store_export.store_export
"""

import asyncio

from services.store_export.ExportService import ExportService
from services.store_export.ResultWriter import ResultWriter
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import redact_secret, setup_logging
from shared.models.export import ExportSettings

PROMPT = "Enter an ecwid api method: "


def build_settings(config: HelperConfig, resource: str) -> ExportSettings:
    """Collect the run-wide export settings from the environment.

    Args:
        config (HelperConfig): The configuration helper.
        resource (str): The API method entered by the user.

    Returns:
        ExportSettings: The settings of this run.
    """
    return ExportSettings(
        resource=resource,
        poll_delay=config.get_duration_val("EXPORT_POLL_DELAY_MS", default_ms=4000),
        poll_timeout=config.get_duration_val("EXPORT_POLL_TIMEOUT_MS", default_ms=300000),
        output_dir=config.get_string_val("EXPORT_OUTPUT_DIR", default="."),
        file_suffix=config.get_string_val("EXPORT_FILE_SUFFIX", default=""),
        exact_pages=config.get_bool_val("EXPORT_EXACT_PAGES", default=False),
    )


async def run(config: HelperConfig, resource: str, manager: StoreClientManager | None = None, transport=None) -> str:
    """Run one export and return the path of the written file."""
    logger = config.get_logger()
    settings = build_settings(config, resource)
    store_client = (manager or StoreClientManager(helper_config=config)).get_client()
    redact_secret(store_client.get_secret())

    try:
        await store_client.boot(transport=transport)
        export_service = ExportService(helper_config=config, settings=settings, store_client=store_client)

        total = await export_service.do_fetch_total()
        logger.info("The amount of requested data is %d items.", total)
        logger.info("Downloading... Please wait.", color="cyan")

        results = await export_service.do_timed_export()
        return ResultWriter(helper_config=config, settings=settings).do_write(results)
    finally:
        await store_client.close()


async def main(transport=None) -> str:
    """Prompt for the resource and run the export."""
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    resource = input(PROMPT)
    return await run(config, resource, transport=transport)


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
