import logging

logger = logging.getLogger("query-map")
