import sys

from modgen.command import main

sys.exit(main())
