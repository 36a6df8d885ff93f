"""Allow ``python -m nitisure_ingest``."""

import sys

from nitisure_ingest.cli import main

sys.exit(main())
