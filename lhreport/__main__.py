"""Allow running lhreport as ``python -m lhreport``."""

from lhreport.cli.main import main

if __name__ == "__main__":
    main()
