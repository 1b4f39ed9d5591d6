import sys

from vpnblocker.cli import main

sys.exit(main())
