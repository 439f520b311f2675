import sys

from snowscrape.cli import main

sys.exit(main())
