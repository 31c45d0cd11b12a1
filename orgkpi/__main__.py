import sys

from orgkpi.cli import main

sys.exit(main())
