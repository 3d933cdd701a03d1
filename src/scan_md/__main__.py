import sys

from scan_md.scan import main

sys.exit(main())
