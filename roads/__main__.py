import sys

from roads.cli import main

sys.exit(main())
