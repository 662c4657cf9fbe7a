import sys

from utitool.cli import main

sys.exit(main())
