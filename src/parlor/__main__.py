"""Entry point for 'python -m parlor' command."""

from parlor.cli import main

if __name__ == "__main__":
    main()
