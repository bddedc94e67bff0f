"""Entry point for 'python -m dynatemplates' command."""

from dynatemplates.cli import main

if __name__ == "__main__":
    main()
