"""Allow running the processor with ``python -m testprocessor``."""

from testprocessor.cli import main

if __name__ == "__main__":
    main()
