import sys

from stylecoach.tools.classify_cli import main

if __name__ == "__main__":
    sys.exit(main())
