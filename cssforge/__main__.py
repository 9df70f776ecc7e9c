"""Allow ``python -m cssforge``."""

from cssforge.cli import main

if __name__ == "__main__":
    main()
