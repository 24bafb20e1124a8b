"""Field tree to JSON Schema and SQL DDL builder."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
