import sys

from gila.cli import main

sys.exit(main())
