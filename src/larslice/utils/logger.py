"""Package-wide logger, shared by the driver, the parent and every algorithm."""

import logging
import sys

# Messages go to the standard output, prefixed with their level
logging.basicConfig(format="[%(levelname)s] %(message)s", stream=sys.stdout)

# Route the warnings raised by numpy or scipy through the logger
logging.captureWarnings(True)

logger = logging.getLogger("larslice")
