"""vestcli - A terminal reader for Serbian news sites.

A terminal-based application that shows the latest articles from N1, Danas
and Insajder as one feed and lets you read them without leaving the terminal.
"""

from .main import main

__all__: list[str] = ["main"]

if __name__ == "__main__":
    main()  # pragma: no cover
