# foodmeds/__main__.py

"""Entry point for executing foodmeds as a module.

This file allows the foodmeds package to be executed as a script
using `python -m foodmeds`.
"""

from .main import main

if __name__ == "__main__":
    main()
