import sys

from oghliner.cli import main

sys.exit(main())
