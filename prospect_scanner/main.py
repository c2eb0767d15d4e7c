from prospect_scanner.cli import app


def main() -> None:
    """Entry point: hand control to the command-line app."""
    app()


if __name__ == "__main__":
    main()
