import sys

from cfgevo.main import main

sys.exit(main())
