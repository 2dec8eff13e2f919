"""Entry point for ``python -m ai_providers``."""

from ai_providers.interfaces.cli import main

if __name__ == "__main__":
    main()
