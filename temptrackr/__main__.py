import sys

from temptrackr.cli import main

sys.exit(main())
