"""
Command-line defaults, read from environment variables or a .env file.

Library classes never read these; they take explicit arguments.
"""

import os

from dotenv import load_dotenv

load_dotenv()

DATA_DIR = os.getenv("DEPCHAIN_DATA_DIR", "data")
BENCHMARK_OUTPUT = os.getenv("DEPCHAIN_BENCHMARK_OUTPUT", "benchmark_results.csv")
BENCHMARK_REPEATS = int(os.getenv("DEPCHAIN_BENCHMARK_REPEATS", "1"))
SEED = int(os.getenv("DEPCHAIN_SEED", "42"))
LOG_LEVEL = os.getenv("DEPCHAIN_LOG_LEVEL", "WARNING").upper()
