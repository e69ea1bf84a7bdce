"""Client and command line tool for the QA test coverage tracking backend."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
