import sys

from issue_hierarchy.cli import main

sys.exit(main())
