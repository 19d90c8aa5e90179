"""Allow running the CLI with ``python -m wpspawn.cli``."""

from wpspawn.cli.main import main


if __name__ == "__main__":
    main()
