"""Allow running as ``python -m skillaudit``."""

import skillaudit.cli as cli

if __name__ == "__main__":
    cli.main()
