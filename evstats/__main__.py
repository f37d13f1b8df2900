import sys

from evstats.cli import main

sys.exit(main())
