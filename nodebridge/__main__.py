"""Package entry point for ``python -m nodebridge``."""

from nodebridge.cli import main

if __name__ == "__main__":
    main()
