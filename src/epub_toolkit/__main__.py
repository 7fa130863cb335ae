import sys

from epub_toolkit.cli import main

sys.exit(main())
