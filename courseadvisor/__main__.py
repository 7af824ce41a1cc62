"""
Package entry point.

Allows running the application via:

    python -m courseadvisor

This simply forwards execution to courseadvisor.cli.main().
"""

from courseadvisor.cli import main

if __name__ == "__main__":
    main()
