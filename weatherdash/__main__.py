import sys

from weatherdash.cli import main

sys.exit(main())
