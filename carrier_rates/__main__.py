import sys

from carrier_rates.cli import main

sys.exit(main())
