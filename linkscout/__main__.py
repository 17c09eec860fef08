import sys

from linkscout.cli import main

sys.exit(main())
