"""Configuration module for vestcli."""

import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Any

import toml

from .engine.geometry import ARTICLE_WIDTH, FEED_WIDTH
from .models import DATE_FORMAT
from .sites import SITES

logger: logging.Logger = logging.getLogger(name=__name__)

# Narrowest column any content block can be laid out in
MIN_WIDTH = 10

# Default configuration content
DEFAULT_CONFIG = """[general]
# Seconds between automatic feed refreshes
refresh_interval = 300
# Reopen the feed of the previous session on start
resume = true
# Where the feed is saved on exit
state_file = "~/.local/state/vestcli/feed.json"
# Show new entries when the feed is scrolled to the top. With false the
# entries on screen never move when new ones arrive.
reveal_new = true
# strftime format of the publish time shown under each entry
date_format = "%d.%m.%Y. %H:%M"
# Number of downloaded articles kept in memory
cache_size = 100

[network]
# Request timeout in seconds
timeout = 10.0
# Remove tracking parameters from article URLs
clean_urls = true

[layout]
# Maximum width of the feed column
feed_width = 50
# Maximum width of the article column
article_width = 70

[sites]
# Sites to read, any of "N1", "Danas", "Insajder"
enabled = ["N1", "Danas", "Insajder"]
"""


class Configuration:
    """A class to handle configuration values."""

    def __init__(self, arguments) -> None:
        """Initialize the configuration.

        Args:
            arguments: Command line arguments
        """
        args = self._parse_arguments(arguments)
        self._setup_logging(args)
        self._handle_special_arguments(args)
        self._load_and_process_configuration(args)

    def _parse_arguments(self, arguments) -> argparse.Namespace:
        """Parse command line arguments.

        Args:
            arguments: Command line arguments

        Returns:
            Parsed arguments namespace
        """
        arg_parser = argparse.ArgumentParser(
            description="A Textual app to read the latest news from N1, Danas and Insajder."
        )
        config_file_location: Path = Path.home() / ".vestcli.toml"

        arg_parser.add_argument(
            "--config",
            dest="config",
            help="Path to the config file",
            default=config_file_location,
        )
        arg_parser.add_argument(
            "--create-config",
            dest="create_config",
            help="Create a default configuration file at the specified path",
            metavar="PATH",
        )
        arg_parser.add_argument(
            "--version",
            action="store_true",
            dest="version",
            help="Show version and exit",
            default=False,
        )
        arg_parser.add_argument(
            "--debug",
            action="store_true",
            dest="debug",
            help="Enable debug logging",
            default=False,
        )
        arg_parser.add_argument(
            "--info",
            action="store_true",
            dest="info",
            help="Enable info logging",
            default=False,
        )
        arg_parser.add_argument(
            "--error",
            action="store_true",
            dest="error",
            help="Enable error logging",
            default=False,
        )
        arg_parser.add_argument(
            "--log-file",
            dest="vestcli_log",
            help="Path to the log file",
            default="vestcli.log",
        )
        arg_parser.add_argument(
            "--no-resume",
            action="store_false",
            dest="resume",
            help="Start with a fresh feed instead of the saved one",
            default=None,
        )

        return arg_parser.parse_args(args=arguments)

    def _setup_logging(self, args: argparse.Namespace) -> None:
        """Set up logging configuration.

        Args:
            args: Parsed command line arguments
        """
        if not args.debug and not args.info and not args.error:
            args.vestcli_log = "/dev/null"

        log_level = (
            logging.ERROR
            if args.error
            else (logging.DEBUG if args.debug else logging.INFO)
        )

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.FileHandler(filename=args.vestcli_log),
            ],
        )

        if args.debug:
            logger.debug(msg="Debug logging enabled")
        elif args.info:
            logger.info(msg="Info logging enabled")
        elif args.error:
            logger.error(msg="Error logging enabled")

    def _handle_special_arguments(self, args: argparse.Namespace) -> None:
        """Handle version and create-config arguments that exit immediately.

        Args:
            args: Parsed command line arguments
        """
        if args.version:
            try:
                version: str = metadata.version(distribution_name="vestcli")
                print(f"vestcli version: {version}")
                sys.exit(0)
            except metadata.PackageNotFoundError as e:
                print(f"Error getting version: {e}")
                sys.exit(1)

        if args.create_config:
            self.create_default_config(config_path=args.create_config)
            print(f"Created default configuration at: {args.create_config}")
            print("Edit this file to change the defaults.")
            sys.exit(0)

    def _load_and_process_configuration(self, args: argparse.Namespace) -> None:
        """Load configuration file and process all settings.

        Args:
            args: Parsed command line arguments
        """
        self.config: dict[str, Any] = self.load_config_file(config_file=args.config)

        try:
            general_config: dict[str, Any] = self.config.get("general", {})
            network_config: dict[str, Any] = self.config.get("network", {})
            layout_config: dict[str, Any] = self.config.get("layout", {})
            sites_config: dict[str, Any] = self.config.get("sites", {})

            self.refresh_interval: float = float(general_config.get("refresh_interval", 300))
            self.resume: bool = bool(general_config.get("resume", True)) if args.resume is None else args.resume
            self.state_file: Path = Path(
                general_config.get("state_file", "~/.local/state/vestcli/feed.json")
            ).expanduser()
            self.reveal_new: bool = bool(general_config.get("reveal_new", True))
            self.date_format: str = general_config.get("date_format", DATE_FORMAT)
            self.cache_size: int = int(general_config.get("cache_size", 100))

            self.timeout: float = float(network_config.get("timeout", 10.0))
            self.clean_urls: bool = bool(network_config.get("clean_urls", True))

            self.feed_width: int = int(layout_config.get("feed_width", FEED_WIDTH))
            self.article_width: int = int(layout_config.get("article_width", ARTICLE_WIDTH))
            if min(self.feed_width, self.article_width) < MIN_WIDTH:
                raise ValueError(f"feed_width and article_width must be at least {MIN_WIDTH}")

            self.sites: list[str] = list(sites_config.get("enabled", list(SITES)))
            unknown: list[str] = [name for name in self.sites if name not in SITES]
            if unknown:
                raise ValueError(f"Unknown sites {', '.join(unknown)}, use any of {', '.join(SITES)}")
            if not self.sites:
                raise ValueError("No sites enabled")

            try:
                self.version: str = metadata.version(distribution_name="vestcli")
            except metadata.PackageNotFoundError:
                self.version = "unknown"
        except (KeyError, TypeError, ValueError) as err:
            logger.error(msg=f"Error reading configuration: {err}")
            print(f"Error reading configuration: {err}")
            sys.exit(1)

    def load_config_file(self, config_file: str) -> dict[str, Any]:
        """Load the configuration from the TOML file.

        A missing file is created with the default settings.

        Args:
            config_file: Path to the config file

        Returns:
            Configuration dictionary

        Raises:
            SystemExit: If the config file cannot be read
        """
        config_path = Path(config_file)

        try:
            if not config_path.exists():
                logger.info(msg=f"Config file {config_file} not found, creating it")
                self.create_default_config(config_path=str(config_path))
            return toml.loads(s=config_path.read_text())
        except (OSError, toml.TomlDecodeError) as err:
            logger.error(msg=f"Error reading configuration file: {err}")
            print(f"Error reading configuration file: {err}")
            sys.exit(1)

    def create_default_config(self, config_path: str) -> None:
        """Create a default configuration file at the specified path.

        Args:
            config_path: Path where the configuration file should be created

        Raises:
            SystemExit: If the file cannot be written
        """
        path = Path(config_path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(data=DEFAULT_CONFIG)
        except OSError as e:
            logger.error(msg=f"Error writing configuration file: {e}")
            print(f"Error writing configuration file: {e}")
            sys.exit(1)
