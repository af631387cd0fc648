"""Entry point: python -m fifths_dash"""

from .cli import main

if __name__ == "__main__":
    main()
