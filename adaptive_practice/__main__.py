"""Allow ``python -m adaptive_practice``."""
from adaptive_practice.cli.main import run

run()
