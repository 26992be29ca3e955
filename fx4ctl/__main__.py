import sys

from fx4ctl.main import main


sys.exit(main())
