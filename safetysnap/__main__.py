import sys

from safetysnap.cli import main

sys.exit(main())
