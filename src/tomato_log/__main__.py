"""Allow running as `python -m tomato_log`."""

from tomato_log.cli.main import app

if __name__ == "__main__":
    app()
