"""Allow ``python -m stagedfmt``; the installed hook runs this way."""

from .cli.main import main

if __name__ == "__main__":
    main()
