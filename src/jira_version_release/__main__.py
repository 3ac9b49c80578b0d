"""Allow ``python -m jira_version_release``."""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
