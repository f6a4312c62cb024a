"""Entry point module for executing gitkeeper as a Python module.

This module enables running gitkeeper via `python -m gitkeeper`, which
delegates to the CLI main function.
"""

from gitkeeper.cli import main

if __name__ == "__main__":
    main()
