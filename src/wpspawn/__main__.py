"""Main entry point for ``python -m wpspawn``."""

from wpspawn.cli.main import main


if __name__ == "__main__":
    main()
