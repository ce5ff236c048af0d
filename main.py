"""
Job Application Tracker

This file sets up:
1) Configuration & logs
2) The JSON record store and CSV export storage
3) The signed-in identity
4) The planner, analytics, sharing, application and profile agents
5) The interactive CLI
"""

import asyncio

from agents.analytics_agent import AnalyticsAgent
from agents.application_agent import ApplicationAgent
from agents.planner_agent import PlannerAgent
from agents.profile_agent import ProfileAgent
from agents.sharing_agent import SharingAgent
from config.settings import load_settings
from storage.csv_storage import CSVStorage
from storage.identity_provider import SettingsIdentityProvider
from storage.json_store import JsonRecordStore
from storage.logs_manager import LogsManager
from ui.cli import CLI


def build_cli(settings: dict, logs_manager: LogsManager = None) -> CLI:
    """Wire store, agents and identity into a CLI instance."""
    store = JsonRecordStore(settings, logs_manager)
    identity = SettingsIdentityProvider(settings).current_identity()
    return CLI(
        planner=PlannerAgent(store, settings, logs_manager),
        analytics=AnalyticsAgent(store, settings, logs_manager),
        sharing=SharingAgent(store, settings, logs_manager),
        identity=identity,
        logs_manager=logs_manager,
        csv_storage=CSVStorage(settings),
        applications=ApplicationAgent(store, settings, logs_manager),
        profiles=ProfileAgent(store, settings, logs_manager),
    )


async def async_main():
    """
    The main async function with proper error handling and resource management.
    """
    logs_manager = None
    try:
        # 1) Load configuration
        settings = load_settings()

        # 2) Initialize logs
        logs_manager = LogsManager(settings)
        await logs_manager.initialize()
        await logs_manager.info("Starting Job Application Tracker...")

        # 3) Build the CLI
        cli = build_cli(settings, logs_manager)
        if cli.identity is None:
            await logs_manager.warning(
                "No TRACKER_USER_ID configured; only public records are available."
            )
        else:
            await logs_manager.info(f"Signed in as {cli.identity.display_name or cli.identity.id}")

        # 4) Run the shell
        await cli.cmdloop_async()

    except Exception as e:
        if logs_manager:
            await logs_manager.error(f"Critical error in async_main: {str(e)}")
        raise
    finally:
        if logs_manager:
            try:
                await logs_manager.info("Shutting down logging system...")
                await logs_manager.shutdown()
            except Exception as e:
                # Can't use logs_manager here since we're shutting it down
                print(f"Error during logs cleanup: {e}")


def main():
    try:
        asyncio.run(async_main())
    except KeyboardInterrupt:
        print("\nInterrupted, goodbye!")


if __name__ == "__main__":
    main()
