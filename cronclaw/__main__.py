"""Run cronclaw as a module."""

from cronclaw.cli.commands import app


def main() -> None:
    """Entrypoint for `python -m cronclaw`."""
    app()


if __name__ == "__main__":
    main()
