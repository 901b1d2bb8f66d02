"""Entry point for running the Crazy Eights host with python -m eights."""

from .cli import main

if __name__ == "__main__":
    main()
