"""Configure pytest for the project."""

import os
import sys

# Make the shared test helpers in this directory importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
