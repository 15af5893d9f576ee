"""
Runtime configuration, read from the environment.
"""

import os

LOG_LEVEL = os.getenv('LOCALMR_LOG_LEVEL', 'INFO').upper()

# 0 runs the reduce phase sequentially on the calling thread
REDUCE_WORKERS = int(os.getenv('LOCALMR_REDUCE_WORKERS', '0'))

# Encoding used by the client when reading input files
ENCODING = os.getenv('LOCALMR_ENCODING', 'utf-8')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
