"""Main entry point for the bookart package."""

from bookart.cli import app


def main():
    """Run the bookart command-line interface."""
    app()


if __name__ == "__main__":
    main()
