"""Main entry point for vestcli."""

import sys

from vestcli.exceptions import FetchError
from vestcli.ui.app import vestcli


def main() -> None:
    """Run the vestcli app.

    Usage:
        vestcli
        vestcli --config path/to/config.toml
        vestcli --create-config path/to/config.toml
        vestcli --no-resume
        vestcli --version
        vestcli --help
    """
    try:
        # Create the application instance only when running
        app = vestcli()
        app.run()
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        print("\nExiting vestcli...")
    except FetchError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        print("Run with --debug and see vestcli.log for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
