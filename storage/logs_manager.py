"""
Logging Management Module (Async)

Uses aiologger for async log output:
- Daily log file naming (tracker_YYYYMMDD.log) under <data_dir>/logs
- Console output with print, coloured with colorama for warnings and errors
- Usable before initialize(): messages then only go to the console
"""

from datetime import datetime
from pathlib import Path

# aiologger essentials
from aiologger.handlers.files import AsyncFileHandler
from aiologger.logger import Logger

from colorama import Fore, Style, init as colorama_init

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


class LogsManager:
    def __init__(self, settings: dict, console_output: bool = True):
        """
        Args:
            settings (dict): Contains at least:
                {
                    "system": {
                        "data_dir": "./data",
                        "log_level": "INFO",
                        "debug_mode": False  # True forces DEBUG
                    }
                }
            console_output (bool): Echo messages to stdout as well as the file.
        """
        system_settings = settings.get('system', {})
        data_dir = system_settings.get('data_dir', './data')
        log_level = str(system_settings.get('log_level', 'INFO')).upper()
        if system_settings.get('debug_mode'):
            log_level = 'DEBUG'

        self.log_dir = Path(data_dir) / 'logs'
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_level = log_level if log_level in LEVELS else 'INFO'
        self.console_output = console_output

        # Daily filename approach
        self.log_file = self.log_dir / f"tracker_{datetime.now().strftime('%Y%m%d')}.log"

        # Created in `initialize()`
        self.logger = None
        self.file_handler = None
        self.is_initialized = False

        colorama_init(autoreset=False)

    async def initialize(self):
        """
        Async init to set up the aiologger file handler.
        Call this once from the running event loop.
        """
        if self.is_initialized:
            return

        self.logger = Logger(name="TrackerLogger", level=LEVELS[self.log_level])
        self.file_handler = AsyncFileHandler(filename=str(self.log_file))
        self.logger.add_handler(self.file_handler)
        self.is_initialized = True

        await self.logger.info("Logging system initialized")

    async def shutdown(self):
        """Flush and close the file handler. Safe to call twice."""
        if not self.is_initialized:
            return

        try:
            if self.file_handler:
                self.logger.remove_handler(self.file_handler)
                await self.file_handler.close()
            await self.logger.shutdown()
        finally:
            self.logger = None
            self.file_handler = None
            self.is_initialized = False

    def _enabled(self, level: str) -> bool:
        return LEVELS[level] >= LEVELS[self.log_level]

    def _echo(self, level: str, msg: str, colour: str = ""):
        if self.console_output:
            reset = Style.RESET_ALL if colour else ""
            print(f"{colour}[{level}] {msg}{reset}")

    # -------------------------------------------------------------------------
    # Logging methods
    # -------------------------------------------------------------------------

    async def debug(self, msg: str):
        if not self._enabled("DEBUG"):
            return
        self._echo("DEBUG", msg)
        if self.logger:
            await self.logger.debug(msg)

    async def info(self, msg: str):
        if not self._enabled("INFO"):
            return
        self._echo("INFO", msg)
        if self.logger:
            await self.logger.info(msg)

    async def warning(self, msg: str):
        if not self._enabled("WARNING"):
            return
        self._echo("WARNING", msg, Fore.YELLOW)
        if self.logger:
            await self.logger.warning(msg)

    async def error(self, msg: str):
        self._echo("ERROR", msg, Fore.RED)
        if self.logger:
            await self.logger.error(msg)

    async def critical(self, msg: str):
        self._echo("CRITICAL", msg, Fore.RED)
        if self.logger:
            await self.logger.critical(msg)
