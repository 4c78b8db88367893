import sys

from zigcli.cli import main

sys.exit(main())
