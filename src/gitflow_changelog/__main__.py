"""Allow ``python -m gitflow_changelog``."""

from gitflow_changelog.cli.app import main

if __name__ == "__main__":
    main()
