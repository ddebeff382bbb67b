"""
QuakeLog CLI Entry Point

Allows running the package as a module: python -m quakelog
"""

from quakelog.cli import main

if __name__ == "__main__":
    main()
