import sys

from forthseek.cli import main

sys.exit(main())
