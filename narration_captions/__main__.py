"""Package entry point for ``python -m narration_captions``."""

from narration_captions.cli import main

if __name__ == "__main__":
    main()
